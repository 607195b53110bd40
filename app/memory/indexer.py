# app/memory/indexer.py

import logging
import time
from typing import Iterable, List

from app.config import CHUNK_MAX_CHARS
from app.errors import ValidationError
from app.memory.chunker import chunk_text
from app.memory.store import DocumentStore
from app.memory.vectors import average_vectors
from app.models import Page, PageInput

logger = logging.getLogger(__name__)


async def embed_page(embedder, text: str, max_len: int = CHUNK_MAX_CHARS) -> List[float]:
    """
    Chunk one page, embed every chunk in one call, average into a page vector.
    """
    chunks = list(chunk_text(text, max_len))

    chunk_vectors = await embedder.embed(chunks)

    return average_vectors(chunk_vectors)


async def index_document(
    doc_id: str,
    pages: Iterable[PageInput],
    embedder,
    store: DocumentStore,
) -> int:
    """
    Embed every page of a document and store them under ``doc_id``.

    The previous entry for the same id is replaced only once every page
    has been embedded; a failure part-way leaves it untouched.

    Returns:
        Number of pages written.
    """

    pages = list(pages or [])

    if not doc_id or not doc_id.strip():
        raise ValidationError("docId and pages required")

    if not pages:
        raise ValidationError("docId and pages required")

    start_time = time.time()

    rows = []

    for page in pages:

        text = page.text or ""

        embedding = await embed_page(embedder, text)

        rows.append(
            Page(
                page_number=page.pageNumber,
                text=text,
                embedding=embedding,
            )
        )

    store.put(doc_id, rows)

    logger.info(
        "Document indexing complete",
        extra={
            "doc_id": doc_id,
            "pages": len(rows),
            "latency_seconds": round(time.time() - start_time, 3),
        },
    )

    return len(rows)
