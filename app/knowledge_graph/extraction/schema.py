from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class Triplet(BaseModel):
    """One extracted fact. The service calls the relation ``type``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    head: str
    relation: str = Field(..., alias="type", description="Relation label")
    tail: str


class GenKwargs(BaseModel):
    num_beams: int
    max_length: int
    length_penalty: float
    num_return_sequences: int


class GenerateRequest(BaseModel):
    text: str
    gen_kwargs: GenKwargs


class GenerateResponse(BaseModel):
    triplets: Optional[List[Triplet]] = None
