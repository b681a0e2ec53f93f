"""
Document registry used by the API and the ingestion pipeline.

Holds document records (status, extracted text, chunks) for the lifetime of
the process. Callers get copies; all changes go through the store methods.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from docsift.chunking.models import Chunk
from docsift.documents.models import DocumentRecord, DocumentStatus, utcnow
from docsift.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    def create(self, record: DocumentRecord) -> DocumentRecord: ...

    def get(self, document_id: str) -> DocumentRecord: ...

    def list_documents(self) -> list[DocumentRecord]: ...

    def mark_ready(self, document_id: str, extracted_text: str, chunks: list[Chunk]) -> DocumentRecord: ...

    def mark_failed(self, document_id: str, error: str) -> DocumentRecord: ...

    def touch(self, document_id: str) -> DocumentRecord: ...

    def delete(self, document_id: str) -> DocumentRecord: ...


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self._records: dict[str, DocumentRecord] = {}
        # sync background tasks run in the threadpool
        self._lock = threading.Lock()

    def create(self, record: DocumentRecord) -> DocumentRecord:
        with self._lock:
            self._records[record.id] = record.model_copy(deep=True)
        logger.info("Document %s registered (%s)", record.id, record.status.value)
        return record.model_copy(deep=True)

    def get(self, document_id: str) -> DocumentRecord:
        with self._lock:
            return self._require(document_id).model_copy(deep=True)

    def list_documents(self) -> list[DocumentRecord]:
        with self._lock:
            records = [r.model_copy(deep=True) for r in self._records.values()]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records

    def mark_ready(self, document_id: str, extracted_text: str, chunks: list[Chunk]) -> DocumentRecord:
        return self._update(
            document_id,
            status=DocumentStatus.READY,
            extracted_text=extracted_text,
            chunks=list(chunks),
            error=None,
        )

    def mark_failed(self, document_id: str, error: str) -> DocumentRecord:
        # a failed document never keeps a partial chunk set
        return self._update(
            document_id,
            status=DocumentStatus.FAILED,
            extracted_text="",
            chunks=[],
            error=error,
        )

    def touch(self, document_id: str) -> DocumentRecord:
        return self._update(document_id, last_accessed=utcnow())

    def delete(self, document_id: str) -> DocumentRecord:
        with self._lock:
            self._require(document_id)
            return self._records.pop(document_id)

    def _update(self, document_id: str, **changes) -> DocumentRecord:
        with self._lock:
            updated = self._require(document_id).model_copy(update=changes)
            self._records[document_id] = updated
            return updated.model_copy(deep=True)

    def _require(self, document_id: str) -> DocumentRecord:
        record = self._records.get(document_id)
        if record is None:
            raise DocumentNotFoundError(document_id)
        return record
