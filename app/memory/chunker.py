# app/memory/chunker.py

import logging
from typing import Iterator

from app.config import CHUNK_MAX_CHARS

logger = logging.getLogger(__name__)


def chunk_text(text: str, max_len: int = CHUNK_MAX_CHARS) -> Iterator[str]:
    """
    Split text into contiguous windows of at most ``max_len`` characters.

    Architecture contract:
    chunker → embedder → page indexer

    Guarantees:
    • chunks joined back together equal the input exactly
    • order preserved, no overlap
    • empty text yields exactly one empty chunk, so every page
      still produces one embedding
    """

    if max_len <= 0:
        raise ValueError(f"Invalid chunk size: {max_len}")

    if not text:
        yield ""
        return

    for start in range(0, len(text), max_len):
        yield text[start:start + max_len]
