# app/memory/retriever.py
import logging
import math
from typing import List, Sequence

from app.config import TOP_K
from app.memory.vectors import cosine_similarity
from app.models import Page, RankedPage

logger = logging.getLogger(__name__)


def rank_pages(
    query_embedding: Sequence[float],
    pages: Sequence[Page],
    top_k: int = TOP_K,
) -> List[RankedPage]:
    """
    Score every page against the query and keep the best ``top_k``.

    Sorting is stable, so equal scores keep the stored page order.
    Pages whose score is NaN (zero-norm vector) rank after all others.
    """
    scored = [
        RankedPage(page=page, score=cosine_similarity(query_embedding, page.embedding))
        for page in pages
    ]

    scored.sort(key=_rank_key)

    return scored[:top_k]


def _rank_key(result: RankedPage):

    if math.isnan(result.score):
        return (1, 0.0)

    return (0, -result.score)


async def retrieve(
    question: str,
    embedder,
    store,
    doc_id: str,
    top_k: int = TOP_K,
) -> List[RankedPage]:
    """
    Retrieve the top-k most similar pages of one document.

    Args:
        question: User's question
        embedder: Embedder used for the query vector
        store: DocumentStore holding the indexed pages
        doc_id: Document to search
        top_k: Number of pages to return

    Returns:
        Ranked pages, best first. Empty when the document is not
        indexed, in which case the embedder is never called.
    """
    pages = store.get(doc_id)

    if not pages:
        return []

    query_embedding = await embedder.embed_one(question)

    results = rank_pages(query_embedding, pages, top_k=top_k)

    logger.info(
        "Retrieval completed",
        extra={
            "doc_id": doc_id,
            "candidates": len(pages),
            "returned": len(results),
            "top_score": results[0].score if results else None,
        },
    )

    return results
