"""
Tests for the extraction client against a mocked /generate endpoint.
"""

import json

import httpx
import pytest

from app.core.config import ExtractionConfig
from app.core.errors import ErrorKind
from app.knowledge_graph.extraction.client import Empty, ExtractionClient, Failure, Ok
from app.knowledge_graph.extraction.scheduler import compute_parameters
from app.knowledge_graph.extraction.schema import Triplet

ENDPOINT = "http://extractor.test"


def _client(handler, endpoint=ENDPOINT):
    return ExtractionClient(endpoint, transport=httpx.MockTransport(handler))


def _params():
    return compute_parameters("apple is red.")


class TestRequest:

    @pytest.mark.asyncio
    async def test_posts_text_and_gen_kwargs(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"triplets": []})

        params = _params()
        await _client(handler, endpoint=ENDPOINT + "/").submit("apple is red.", params)

        assert seen["method"] == "POST"
        assert seen["url"] == ENDPOINT + "/generate"
        assert seen["content_type"] == "application/json"
        assert seen["body"] == {"text": "apple is red.", "gen_kwargs": params.to_gen_kwargs()}

    def test_from_config(self):
        client = ExtractionClient.from_config(ExtractionConfig(extraction_endpoint=ENDPOINT, request_timeout=3.0))
        assert client.url == ENDPOINT + "/generate"
        assert client.timeout == 3.0


class TestSuccess:

    @pytest.mark.asyncio
    async def test_triplets_mapped_from_type(self):
        def handler(request):
            return httpx.Response(200, json={"triplets": [
                {"head": "Obama", "type": "born in", "tail": "Hawaii"},
                {"head": "Hawaii", "type": "part of", "tail": "USA", "score": 0.9},
            ]})

        result = await _client(handler).submit("text", _params())
        assert isinstance(result, Ok)
        assert result.triplets[0] == Triplet(head="Obama", relation="born in", tail="Hawaii")
        assert result.triplets[1].relation == "part of"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"triplets": []}, {}, {"triplets": None}])
    async def test_no_triplets_is_empty(self, body):
        result = await _client(lambda r: httpx.Response(200, json=body)).submit("text", _params())
        assert isinstance(result, Empty)

    @pytest.mark.asyncio
    async def test_malformed_triplets_rejected_whole(self):
        def handler(request):
            return httpx.Response(200, json={"triplets": [
                {"head": "Obama", "type": "born in", "tail": "Hawaii"},
                {"head": "Hawaii"},
            ]})

        result = await _client(handler).submit("text", _params())
        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.SERVICE

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        result = await _client(lambda r: httpx.Response(200, text="<html>")).submit("text", _params())
        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.SERVICE


class TestFailures:

    @pytest.mark.asyncio
    async def test_service_error_uses_detail(self):
        result = await _client(
            lambda r: httpx.Response(503, json={"detail": "model overloaded"})
        ).submit("text", _params())
        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.SERVICE
        assert result.message == "model overloaded"
        assert result.error.status_code == 503

    @pytest.mark.asyncio
    async def test_service_error_without_detail(self):
        result = await _client(lambda r: httpx.Response(500, text="oops")).submit("text", _params())
        assert result.kind is ErrorKind.SERVICE
        assert result.message == "Extraction service responded with HTTP 500"

    @pytest.mark.asyncio
    async def test_structured_detail_is_encoded(self):
        detail = [{"loc": ["body", "text"], "msg": "field required"}]
        result = await _client(lambda r: httpx.Response(422, json={"detail": detail})).submit("text", _params())
        assert json.loads(result.message) == detail

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc", [httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError])
    async def test_no_response_is_connectivity(self, exc):
        def handler(request):
            raise exc("boom", request=request)

        result = await _client(handler).submit("text", _params())
        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.CONNECTIVITY

    @pytest.mark.asyncio
    async def test_undecodable_body_is_service_error(self):
        def handler(request):
            return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")

        result = await _client(handler).submit("text", _params())
        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.SERVICE

    @pytest.mark.asyncio
    async def test_unsendable_request(self):
        def handler(request):
            raise httpx.UnsupportedProtocol("no scheme", request=request)

        result = await _client(handler).submit("text", _params())
        assert result.kind is ErrorKind.REQUEST

    @pytest.mark.asyncio
    async def test_missing_endpoint(self):
        calls = []
        result = await _client(lambda r: calls.append(r), endpoint="").submit("text", _params())
        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.REQUEST
        assert calls == []
