from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from app.core.config import ExtractionConfig


@dataclass(frozen=True)
class ExtractionParameters:
    beam_count: int
    max_output_length: int
    length_penalty: float
    sequence_count: int

    def __post_init__(self):
        if self.beam_count < 1:
            raise ValueError(f"beam_count must be >= 1, got {self.beam_count}")
        if self.max_output_length < 1:
            raise ValueError(f"max_output_length must be >= 1, got {self.max_output_length}")
        if not self.length_penalty > 0:
            raise ValueError(f"length_penalty must be > 0, got {self.length_penalty}")
        if self.sequence_count < 1:
            raise ValueError(f"sequence_count must be >= 1, got {self.sequence_count}")

    def to_gen_kwargs(self) -> dict:
        """Generation kwargs in the names the service expects."""
        return {
            "num_beams": self.beam_count,
            "max_length": self.max_output_length,
            "length_penalty": self.length_penalty,
            "num_return_sequences": self.sequence_count,
        }


@dataclass(frozen=True)
class InterpolationRange:
    min_length: int
    max_length: int
    min_value: float
    max_value: float

    def __post_init__(self):
        if self.min_length >= self.max_length:
            raise ValueError(
                f"min_length ({self.min_length}) must be below max_length ({self.max_length})"
            )
        if self.min_value > self.max_value:
            raise ValueError(
                f"min_value ({self.min_value}) must not exceed max_value ({self.max_value})"
            )

    def at(self, length: int) -> float:
        """Clamped linear interpolation of the value for a text of ``length`` chars."""
        if length <= self.min_length:
            return self.min_value
        if length >= self.max_length:
            return self.max_value
        ratio = (length - self.min_length) / (self.max_length - self.min_length)
        return self.min_value + ratio * (self.max_value - self.min_value)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def penalty_range(cfg: ExtractionConfig) -> InterpolationRange:
    return InterpolationRange(
        cfg.penalty_min_chars, cfg.penalty_max_chars,
        cfg.min_length_penalty, cfg.max_length_penalty,
    )


def sequences_range(cfg: ExtractionConfig) -> InterpolationRange:
    return InterpolationRange(
        cfg.sequences_min_chars, cfg.sequences_max_chars,
        cfg.min_return_sequences, cfg.max_return_sequences,
    )


def compute_parameters(text: str, cfg: Optional[ExtractionConfig] = None) -> ExtractionParameters:
    """Derive generation parameters from the size of ``text``.

    Beams and max length are fixed; length penalty and the number of
    returned sequences scale with the character count. Callers reject
    blank text before getting here.
    """
    cfg = cfg or ExtractionConfig()
    length = len(text)

    length_penalty = penalty_range(cfg).at(length)
    sequence_count = _round_half_up(sequences_range(cfg).at(length))
    # beam search cannot return more sequences than it keeps beams
    sequence_count = max(1, min(sequence_count, cfg.num_beams))

    return ExtractionParameters(
        beam_count=cfg.num_beams,
        max_output_length=cfg.max_length,
        length_penalty=float(length_penalty),
        sequence_count=sequence_count,
    )


def warmup_parameters(cfg: Optional[ExtractionConfig] = None) -> ExtractionParameters:
    cfg = cfg or ExtractionConfig()
    return ExtractionParameters(
        beam_count=cfg.warmup_num_beams,
        max_output_length=cfg.warmup_max_length,
        length_penalty=1.0,
        sequence_count=1,
    )
