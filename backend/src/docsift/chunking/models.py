from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., min_length=1)
    chunk_index: int = Field(..., ge=0)
    page_number: int = 0  # no page tracking yet


class ScoredChunk(Chunk):
    # score/raw_score stay None when the query had no usable terms
    score: float | None = None
    raw_score: float | None = None
    matched_words: int = 0
