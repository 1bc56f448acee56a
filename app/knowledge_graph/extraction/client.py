from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

import httpx
from pydantic import ValidationError as SchemaError

from app.core.config import ExtractionConfig
from app.core.errors import (
    ConnectivityError,
    ErrorKind,
    ExtractionError,
    RequestConstructionError,
    ServiceError,
)
from app.knowledge_graph.extraction.scheduler import ExtractionParameters
from app.knowledge_graph.extraction.schema import (
    GenerateRequest,
    GenerateResponse,
    GenKwargs,
    Triplet,
)

LOGGER = logging.getLogger("kggen")


@dataclass(frozen=True)
class Ok:
    triplets: List[Triplet] = field(default_factory=list)


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Failure:
    error: ExtractionError

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def message(self) -> str:
        return self.error.message


ExtractionResult = Union[Ok, Empty, Failure]


def _error_detail(response: httpx.Response) -> str:
    fallback = f"Extraction service responded with HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict) or body.get("detail") is None:
        return fallback
    detail = body["detail"]
    if isinstance(detail, str):
        return detail
    return json.dumps(detail)


def _parse_success(response: httpx.Response) -> ExtractionResult:
    try:
        body = response.json()
    except ValueError:
        return Failure(ServiceError("Extraction service returned a response that is not JSON",
                                    status_code=response.status_code))
    try:
        parsed = GenerateResponse.model_validate(body)
    except SchemaError as e:
        LOGGER.debug("Rejected response body: %s", e)
        return Failure(ServiceError("Extraction service returned malformed triplets",
                                    status_code=response.status_code))
    if not parsed.triplets:
        return Empty()
    return Ok(list(parsed.triplets))


class ExtractionClient:
    """Talks to the remote ``/generate`` endpoint, one request per call.

    No retries and no rate limiting here. Every outcome comes back as a
    value: ``Ok``, ``Empty`` or ``Failure``.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = (endpoint or "").strip()
        self.timeout = timeout
        self.transport = transport
        if not self.endpoint:
            LOGGER.warning("EXTRACTION_ENDPOINT is missing. Set it in .env or environment variables.")

    @classmethod
    def from_config(cls, cfg: ExtractionConfig, **kwargs) -> "ExtractionClient":
        return cls(cfg.extraction_endpoint, timeout=cfg.request_timeout, **kwargs)

    @property
    def url(self) -> str:
        return f"{self.endpoint.rstrip('/')}/generate"

    async def submit(self, text: str, params: ExtractionParameters) -> ExtractionResult:
        if not self.endpoint:
            return Failure(RequestConstructionError("Extraction endpoint is not configured"))

        payload = GenerateRequest(
            text=text,
            gen_kwargs=GenKwargs(**params.to_gen_kwargs()),
        ).model_dump()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
            LOGGER.error("Could not send extraction request to %s: %s", self.url, e)
            return Failure(RequestConstructionError(f"Could not send the request: {e}"))
        except httpx.DecodingError as e:
            # a response arrived, its body just could not be decoded
            LOGGER.error("Undecodable response from extraction service at %s: %s", self.url, e)
            return Failure(ServiceError(f"Extraction service returned an undecodable response: {e}"))
        except httpx.RequestError as e:
            LOGGER.error("No response from extraction service at %s: %s", self.url, e)
            return Failure(ConnectivityError(f"Could not reach the extraction service: {e}"))

        if not response.is_success:
            return Failure(ServiceError(_error_detail(response), status_code=response.status_code))

        return _parse_success(response)
