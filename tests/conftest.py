import pytest

from app.core.config import ExtractionConfig
from app.knowledge_graph.extraction.schema import Triplet

from fakes import FakeSink


@pytest.fixture
def cfg():
    return ExtractionConfig(extraction_endpoint="http://extractor.test")


@pytest.fixture
def obama():
    return [Triplet(head="Obama", relation="born in", tail="Hawaii")]


@pytest.fixture
def sink():
    return FakeSink()
