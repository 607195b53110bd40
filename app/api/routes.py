import logging
import secrets
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import JSONResponse

from app.api.dependencies import (
    get_document_store,
    get_embedder,
    get_llm_client,
)
from app.config import MAX_FILE_SIZE_MB, UPLOAD_DIR
from app.errors import ConfigError, UpstreamError, error_payload
from app.memory.indexer import index_document
from app.memory.store import DocumentStore
from app.models import (
    ChatRequest,
    ChatResponse,
    DocumentInfo,
    HealthResponse,
    IndexRequest,
    IndexResponse,
    ListDocumentsResponse,
    UploadResponse,
)
from app.observability.metrics import metrics_tracker
from app.workflow.document_qa import answer_question


# ============================================================
# LOGGER
# ============================================================

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# ============================================================
# HELPERS
# ============================================================

def generate_document_id() -> str:
    return f"doc_{uuid.uuid4().hex[:12]}"


def stored_filename(original: str) -> str:
    """
    Random prefix plus the client's basename, stripped of any path parts.
    """
    basename = Path(original or "upload.pdf").name or "upload.pdf"
    return f"{secrets.token_hex(6)}-{basename}"


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


# ============================================================
# HEALTH
# ============================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(ok=True)


# ============================================================
# UPLOAD DOCUMENT
# ============================================================

@router.post("/upload", response_model=UploadResponse)
async def upload_document(file: UploadFile = File(None)):

    if file is None:

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "No file"},
        )

    file_bytes = await file.read()

    size_mb = len(file_bytes) / (1024 * 1024)

    if size_mb > MAX_FILE_SIZE_MB:

        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={
                "error": "file_too_large",
                "detail": f"File too large: {size_mb:.2f}MB (limit {MAX_FILE_SIZE_MB}MB)",
            },
        )

    upload_dir = Path(UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)

    file_path = upload_dir / stored_filename(file.filename)

    with file_path.open("wb") as buffer:
        buffer.write(file_bytes)

    doc_id = generate_document_id()

    logger.info(
        "Document uploaded",
        extra={
            "doc_id": doc_id,
            "upload_filename": file.filename,
            "bytes": len(file_bytes),
            "path": str(file_path),
        },
    )

    return UploadResponse(
        docId=doc_id,
        filename=file.filename or file_path.name,
        path=str(file_path),
    )


# ============================================================
# INDEX PAGES
# ============================================================

@router.post("/index", response_model=IndexResponse)
async def index_pages(
    payload: IndexRequest,
    request: Request,
    store: DocumentStore = Depends(get_document_store),
    embedder=Depends(get_embedder),
):

    try:

        count = await index_document(
            doc_id=payload.docId,
            pages=payload.pages,
            embedder=embedder,
            store=store,
        )

    except (ConfigError, UpstreamError) as e:

        logger.error(
            "Indexing failed",
            extra={
                "request_id": _request_id(request),
                "doc_id": payload.docId,
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload("embedding_failed", e),
        )

    return IndexResponse(ok=True, pages=count)


# ============================================================
# ASK QUESTION
# ============================================================

@router.post("/chat", response_model=ChatResponse)
async def chat(
    payload: ChatRequest,
    request: Request,
    store: DocumentStore = Depends(get_document_store),
    embedder=Depends(get_embedder),
    llm_client=Depends(get_llm_client),
):

    try:

        result = await answer_question(
            doc_id=payload.docId,
            question=payload.question,
            embedder=embedder,
            store=store,
            llm_client=llm_client,
        )

    except (ConfigError, UpstreamError) as e:

        logger.error(
            "Chat failed",
            extra={
                "request_id": _request_id(request),
                "doc_id": payload.docId,
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload("chat_failed", e),
        )

    return ChatResponse(**result)


# ============================================================
# LIST DOCUMENTS
# ============================================================

@router.get("/documents", response_model=ListDocumentsResponse)
async def list_documents(store: DocumentStore = Depends(get_document_store)):

    stats = store.get_stats()

    return ListDocumentsResponse(
        documents=[
            DocumentInfo(docId=doc_id, pages=count)
            for doc_id, count in stats["documents"].items()
        ],
        total_documents=stats["total_documents"],
        total_pages=stats["total_pages"],
    )


# ============================================================
# METRICS ENDPOINT
# ============================================================

@router.get("/metrics")
async def get_metrics():
    return metrics_tracker.get_metrics()
