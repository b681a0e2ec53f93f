import logging
import uuid
from pathlib import Path

from fastapi import BackgroundTasks, Body, Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse

from docsift.chunking.chunker import chunk_text
from docsift.documents.models import DocumentRecord, DocumentStatus, DocumentSummary
from docsift.documents.store import DocumentStore, InMemoryDocumentStore
from docsift.exceptions import DocumentNotFoundError
from docsift.ingest.pipeline import process_document
from docsift.logging_config import configure_logging
from docsift.retrieval.ranker import rank_chunks
from docsift.settings import settings

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="docsift API", version="0.1.0")
app.state.store = InMemoryDocumentStore()


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


@app.exception_handler(DocumentNotFoundError)
async def document_not_found_handler(request: Request, exc: DocumentNotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.get("/healthz")
async def healthz():
    return {"status": "ok", "env": settings.app_env}


@app.post("/chunk/preview")
async def chunk_preview(
    text: str = Body(..., embed=True),
    chunk_size: int = Body(500, embed=True, ge=1, le=5000),
    overlap: int = Body(50, embed=True, ge=0, le=4999),
):
    """
    Chunk raw text without storing anything. Useful for tuning sizes.
    """
    chunks = chunk_text(text, chunk_size=chunk_size, overlap=overlap)
    return {
        "chunks_total": len(chunks),
        "chunks": [c.model_dump() for c in chunks],
    }


@app.post("/documents/upload", status_code=201, response_model=DocumentRecord)
async def upload_document(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    title: str = Form(""),
    store: DocumentStore = Depends(get_store),
):
    """
    Store the upload and schedule extraction + chunking in the background.
    The returned record is still `processing`; poll GET /documents/{id}.
    """
    if not title.strip():
        raise HTTPException(status_code=400, detail="Please provide a document title")
    if not file.filename:
        raise HTTPException(status_code=400, detail="Filename is required")

    suffix = Path(file.filename).suffix.lower()
    if suffix not in settings.allowed_extensions:
        raise HTTPException(
            status_code=400,
            detail=f"File type '{suffix}' not allowed. Allowed: {', '.join(settings.allowed_extensions)}",
        )

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {settings.max_upload_bytes} bytes",
        )

    document_id = uuid.uuid4().hex
    upload_dir = Path(settings.data_dir) / "uploads"
    upload_dir.mkdir(parents=True, exist_ok=True)
    file_path = upload_dir / f"{document_id}-{Path(file.filename).name}"
    file_path.write_bytes(content)

    record = store.create(
        DocumentRecord(
            id=document_id,
            title=title.strip(),
            file_name=file.filename,
            file_path=str(file_path),
            file_size=len(content),
        )
    )
    logger.info("Upload %s saved (%d bytes), processing started", document_id, len(content))

    background_tasks.add_task(
        process_document,
        document_id,
        file_path,
        store,
        chunk_size=settings.chunk_size,
        overlap=settings.chunk_overlap,
    )
    return record


@app.get("/documents", response_model=list[DocumentSummary])
async def list_documents(store: DocumentStore = Depends(get_store)):
    return [DocumentSummary.from_record(r) for r in store.list_documents()]


@app.get("/documents/{document_id}", response_model=DocumentRecord)
async def get_document(document_id: str, store: DocumentStore = Depends(get_store)):
    return store.touch(document_id)


@app.delete("/documents/{document_id}")
async def delete_document(document_id: str, store: DocumentStore = Depends(get_store)):
    record = store.delete(document_id)

    try:
        Path(record.file_path).unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove file %s for document %s", record.file_path, document_id)

    return {"deleted": document_id}


@app.post("/documents/{document_id}/search")
async def search_document(
    document_id: str,
    query: str = Body(..., embed=True, min_length=1, max_length=1000),
    max_chunks: int | None = Body(None, embed=True, ge=1, le=50),
    store: DocumentStore = Depends(get_store),
):
    """
    Lexical retrieval over one document's chunks.
    """
    record = store.get(document_id)
    if record.status != DocumentStatus.READY:
        raise HTTPException(
            status_code=409,
            detail=f"Document is {record.status.value}, not ready for search",
        )

    limit = max_chunks or settings.max_chunks
    results = rank_chunks(record.chunks, query, max_chunks=limit)

    return {
        "document_id": document_id,
        "query": query,
        "results": [r.model_dump() for r in results],
    }
