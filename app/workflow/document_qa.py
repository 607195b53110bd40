# app/workflow/document_qa.py
import logging
from typing import Dict

from app.config import TOP_K
from app.memory.retriever import retrieve
from app.prompts.prompt_builder import build_messages
from app.prompts.system_prompts import NOT_INDEXED_ANSWER

logger = logging.getLogger(__name__)


async def answer_question(
    doc_id: str,
    question: str,
    embedder,
    store,
    llm_client,
    top_k: int = TOP_K,
) -> Dict:
    """
    Answer a question about one document with retrieval-augmented generation.

    Citations are the retrieved pages in rank order. They are not parsed
    from the model's answer, so they say which pages the model was shown,
    not which ones it actually relied on.
    """
    if not store.has(doc_id):

        logger.info("Chat on unindexed document", extra={"doc_id": doc_id})

        return {
            "answer": NOT_INDEXED_ANSWER,
            "citations": [],
        }

    ranked = await retrieve(
        question=question,
        embedder=embedder,
        store=store,
        doc_id=doc_id,
        top_k=top_k,
    )

    answer = await llm_client.complete(build_messages(question, ranked))

    return {
        "answer": answer,
        "citations": [{"pageNumber": r.page.page_number} for r in ranked],
    }
