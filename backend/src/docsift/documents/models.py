from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from docsift.chunking.models import Chunk


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStatus(str, Enum):
    PROCESSING = "processing"
    READY = "ready"
    FAILED = "failed"


class DocumentRecord(BaseModel):
    id: str
    title: str
    file_name: str
    file_path: str
    file_size: int = Field(..., ge=0)
    status: DocumentStatus = DocumentStatus.PROCESSING
    extracted_text: str = ""
    chunks: list[Chunk] = Field(default_factory=list)
    error: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    last_accessed: datetime | None = None


class DocumentSummary(BaseModel):
    """Listing view: the record without text and chunks."""

    id: str
    title: str
    file_name: str
    file_size: int
    status: DocumentStatus
    chunk_count: int
    error: str | None = None
    created_at: datetime
    last_accessed: datetime | None = None

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentSummary":
        return cls(
            id=record.id,
            title=record.title,
            file_name=record.file_name,
            file_size=record.file_size,
            status=record.status,
            chunk_count=len(record.chunks),
            error=record.error,
            created_at=record.created_at,
            last_accessed=record.last_accessed,
        )
