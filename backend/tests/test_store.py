from datetime import datetime, timedelta, timezone

import pytest

from docsift.chunking.models import Chunk
from docsift.documents.models import DocumentRecord, DocumentStatus, DocumentSummary
from docsift.documents.store import InMemoryDocumentStore
from docsift.exceptions import DocumentNotFoundError


def _record(document_id: str, **overrides) -> DocumentRecord:
    fields = {
        "id": document_id,
        "title": f"Title {document_id}",
        "file_name": f"{document_id}.txt",
        "file_path": f"/tmp/{document_id}.txt",
        "file_size": 10,
    }
    fields.update(overrides)
    return DocumentRecord(**fields)


class TestInMemoryDocumentStore:
    """Status transitions and lookups."""

    def test_new_record_is_processing(self, store: InMemoryDocumentStore) -> None:
        """Should default a created record to processing with no chunks."""
        created = store.create(_record("a"))

        assert created.status == DocumentStatus.PROCESSING
        assert store.get("a").chunks == []

    def test_get_returns_copy(self, store: InMemoryDocumentStore) -> None:
        """Should not let callers mutate stored records."""
        store.create(_record("a"))
        copy = store.get("a")
        copy.title = "changed"

        assert store.get("a").title == "Title a"

    def test_mark_ready_stores_chunks(self, store: InMemoryDocumentStore) -> None:
        """Should keep chunks verbatim on ready."""
        store.create(_record("a"))
        chunks = [Chunk(content="first", chunk_index=0), Chunk(content="second", chunk_index=1)]

        record = store.mark_ready("a", "first\n\nsecond", chunks)

        assert record.status == DocumentStatus.READY
        assert record.chunks == chunks
        assert record.chunks[1].model_dump() == {"content": "second", "chunk_index": 1, "page_number": 0}

    def test_mark_failed_drops_chunks(self, store: InMemoryDocumentStore) -> None:
        """Should clear any chunks and record the error."""
        store.create(_record("a"))
        store.mark_ready("a", "text", [Chunk(content="text", chunk_index=0)])

        record = store.mark_failed("a", "boom")

        assert record.status == DocumentStatus.FAILED
        assert record.chunks == []
        assert record.extracted_text == ""
        assert record.error == "boom"

    def test_touch_sets_last_accessed(self, store: InMemoryDocumentStore) -> None:
        """Should stamp last_accessed."""
        store.create(_record("a"))
        assert store.touch("a").last_accessed is not None

    def test_list_newest_first(self, store: InMemoryDocumentStore) -> None:
        """Should order records by creation time, newest first."""
        now = datetime.now(timezone.utc)
        store.create(_record("old", created_at=now - timedelta(minutes=5)))
        store.create(_record("new", created_at=now))

        assert [r.id for r in store.list_documents()] == ["new", "old"]

    def test_delete(self, store: InMemoryDocumentStore) -> None:
        """Should remove the record and return it."""
        store.create(_record("a"))

        assert store.delete("a").id == "a"
        with pytest.raises(DocumentNotFoundError):
            store.get("a")

    @pytest.mark.parametrize("method", ["get", "touch", "delete"])
    def test_unknown_id(self, store: InMemoryDocumentStore, method: str) -> None:
        """Should raise DocumentNotFoundError for unknown ids."""
        with pytest.raises(DocumentNotFoundError) as exc_info:
            getattr(store, method)("missing")
        assert exc_info.value.details == {"document_id": "missing"}


class TestDocumentSummary:
    """Listing view."""

    def test_from_record_counts_chunks(self) -> None:
        """Should expose the chunk count instead of the chunks."""
        record = _record("a", chunks=[Chunk(content="x", chunk_index=0)], status=DocumentStatus.READY)

        summary = DocumentSummary.from_record(record)

        assert summary.chunk_count == 1
        assert "chunks" not in summary.model_dump()
