# app/prompts/prompt_builder.py

from typing import Dict, List, Sequence

from app.config import CONTEXT_CHARS_PER_PAGE
from app.models import RankedPage
from app.prompts.system_prompts import (
    DOCUMENT_QA_PREAMBLE,
    DOCUMENT_QA_SYSTEM_PROMPT,
)


def build_context(
    ranked: Sequence[RankedPage],
    max_chars: int = CONTEXT_CHARS_PER_PAGE,
) -> str:
    """
    One ``Page <n>: <text>`` block per retrieved page, blank line between.

    Uses the full page text (not the embedding chunks), cut to ``max_chars``.
    """
    return "\n\n".join(
        f"Page {r.page.page_number}: {r.page.text[:max_chars]}"
        for r in ranked
    )


def build_prompt(question: str, ranked: Sequence[RankedPage]) -> str:

    context = build_context(ranked)

    return f"{DOCUMENT_QA_PREAMBLE}\n\nContext:\n{context}\n\nQuestion: {question}"


def build_messages(question: str, ranked: Sequence[RankedPage]) -> List[Dict[str, str]]:
    """
    System instruction plus the assembled user prompt.
    """
    return [
        {"role": "system", "content": DOCUMENT_QA_SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(question, ranked)},
    ]
