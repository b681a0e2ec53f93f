from __future__ import annotations

import logging
import time
from pathlib import Path

from docsift.chunking.chunker import chunk_text
from docsift.documents.models import DocumentStatus
from docsift.documents.store import DocumentStore
from docsift.exceptions import DocumentNotFoundError, EmptyDocumentError
from docsift.ingest.extract import extract_text

logger = logging.getLogger(__name__)


def process_document(
    document_id: str,
    path: Path | str,
    store: DocumentStore,
    chunk_size: int = 500,
    overlap: int = 50,
) -> DocumentStatus:
    """
    Background ingestion job: extract -> chunk -> store.

    The outcome is written to the document status, never returned to the
    uploader. Any failure marks the document failed with no chunks kept.
    """
    t0 = time.time()
    logger.info("Processing document %s from %s", document_id, path)

    try:
        extracted = extract_text(path)

        # whitespace-only extraction is a failure, not an empty success
        if not extracted.text.strip():
            raise EmptyDocumentError("Extracted text is empty", document_id=document_id)

        chunks = chunk_text(extracted.text, chunk_size=chunk_size, overlap=overlap)
        store.mark_ready(document_id, extracted.text, chunks)
    except DocumentNotFoundError:
        logger.warning("Document %s was deleted while processing", document_id)
        return DocumentStatus.FAILED
    except Exception as exc:
        logger.exception("Processing failed for document %s", document_id)
        try:
            store.mark_failed(document_id, str(exc))
        except DocumentNotFoundError:
            logger.warning("Document %s was deleted while processing", document_id)
        return DocumentStatus.FAILED

    elapsed_ms = int((time.time() - t0) * 1000)
    logger.info(
        "Document %s ready: %d chunks, %d pages, %d ms",
        document_id,
        len(chunks),
        extracted.num_pages,
        elapsed_ms,
    )
    return DocumentStatus.READY
