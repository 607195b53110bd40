# app/main.py
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.config import LOG_FILE, LOG_LEVEL, MODEL_CHAT, MODEL_EMBED, get_api_key
from app.errors import (
    RagError,
    rag_error_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from app.llm.client import LLMClient
from app.memory.embedder import Embedder
from app.memory.store import InMemoryDocumentStore
from app.observability.logger import get_logger, setup_logging
from app.observability.metrics import metrics_tracker

# Initialize logging FIRST
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="PDF Chat RAG API",
    description="Upload a PDF, index its pages, ask questions with page citations",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every HTTP request with latency and record request metrics.
    """

    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    logger.info(
        "request_started",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None
        }
    )

    start_time = time.time()

    try:

        response = await call_next(request)

    except Exception as e:

        latency = time.time() - start_time

        metrics_tracker.record_failure()

        logger.error(
            "request_failed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "latency_seconds": round(latency, 3),
                "error": str(e),
                "error_type": type(e).__name__
            },
            exc_info=True
        )

        raise

    latency = time.time() - start_time

    if response.status_code >= 500:
        metrics_tracker.record_failure()
    else:
        metrics_tracker.record_success(latency)

    logger.info(
        "request_completed",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "latency_seconds": round(latency, 3)
        }
    )

    return response


# Exception handlers
app.add_exception_handler(RagError, rag_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Include API routes
app.include_router(router)


@app.on_event("startup")
async def startup_event():

    app.state.document_store = InMemoryDocumentStore()
    app.state.embedder = Embedder(model=MODEL_EMBED)
    app.state.llm_client = LLMClient(model=MODEL_CHAT)

    logger.info("application_startup", extra={"version": "1.0.0"})

    if not get_api_key():

        logger.warning(
            "missing_api_key",
            extra={
                "warning_detail":
                "OPENAI_API_KEY not set. Indexing and chat will fail."
            }
        )


@app.on_event("shutdown")
async def shutdown_event():

    app.state.document_store.clear()

    logger.info("application_shutdown")


@app.get("/")
async def root():

    return {
        "message": "PDF Chat RAG API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
        "metrics": "/api/metrics"
    }
