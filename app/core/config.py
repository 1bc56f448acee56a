from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from app.core.settings import settings


@dataclass(frozen=True)
class ExtractionConfig:
    # base url of the extraction service, "/generate" is appended
    extraction_endpoint: str = settings.EXTRACTION_ENDPOINT
    # None = no timeout, a 50-beam generation can take minutes
    request_timeout: Optional[float] = None

    # fixed for normal submissions; higher num_beams is more accurate but slower
    num_beams: int = 50
    max_length: int = 512

    # length_penalty grows with input size (chars)
    penalty_min_chars: int = 100
    penalty_max_chars: int = 1000
    min_length_penalty: float = 1.0
    max_length_penalty: float = 10.0

    # num_return_sequences grows with input size (chars)
    sequences_min_chars: int = 100
    sequences_max_chars: int = 1000
    min_return_sequences: int = 1
    max_return_sequences: int = 3

    # warm-up call only wakes the endpoint up, output is thrown away
    warmup_num_beams: int = 1
    warmup_max_length: int = 16
