# app/memory/embedder.py

"""
Embedding client for the OpenAI embeddings API.

Architecture contract:
chunker → embedder → page indexer

Guarantees:
• One vector per input text, same order
• Every vector shares the model's dimensionality
• Missing credential → ConfigError
• Remote failure → UpstreamError with the upstream message
• No retries, no batching limits, transport default timeouts
"""

import logging
from typing import List, Optional, Sequence

from openai import AsyncOpenAI, OpenAIError

from app.config import (
    MODEL_EMBED,
    OPENAI_BASE_URL,
    OPENAI_PROJECT,
    get_api_key,
)
from app.errors import ConfigError, UpstreamError

logger = logging.getLogger(__name__)


class Embedder:
    """
    Async embedding generator.

    Responsibilities:
    • Call the embeddings endpoint for a batch of texts
    • Validate the response shape
    • Translate SDK failures into pipeline errors
    """

    # ============================================================
    # INITIALIZATION
    # ============================================================

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: str = MODEL_EMBED,
    ):

        self._client = client
        self._model = model

        logger.info(
            "Embedding client configured",
            extra={"model": model}
        )

    def _get_client(self) -> AsyncOpenAI:

        if self._client is not None:
            return self._client

        api_key = get_api_key()

        if not api_key:
            raise ConfigError("OPENAI_API_KEY missing")

        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=OPENAI_BASE_URL,
            project=OPENAI_PROJECT,
        )

        return self._client

    # ============================================================
    # PUBLIC API
    # ============================================================

    async def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """
        Embed an ordered batch of texts in a single API call.
        """

        if not texts:
            return []

        client = self._get_client()

        logger.debug(
            "Embedding started",
            extra={"texts": len(texts), "model": self._model}
        )

        try:

            response = await client.embeddings.create(
                model=self._model,
                input=list(texts),
            )

        except OpenAIError as e:

            logger.error(
                "Embedding generation failed",
                extra={"error": str(e), "error_type": type(e).__name__}
            )

            raise UpstreamError(str(e)) from e

        # The API may return items out of order; `index` is authoritative
        items = sorted(
            response.data,
            key=lambda item: getattr(item, "index", 0),
        )

        vectors = [list(item.embedding) for item in items]

        if len(vectors) != len(texts):
            raise UpstreamError(
                f"Embedding count mismatch: expected {len(texts)}, got {len(vectors)}"
            )

        dims = {len(v) for v in vectors}

        if len(dims) > 1:
            raise UpstreamError(
                f"Inconsistent embedding dimensionality: {sorted(dims)}"
            )

        logger.debug(
            "Embedding completed",
            extra={"texts": len(texts), "dimension": dims.pop()}
        )

        return vectors

    async def embed_one(self, text: str) -> List[float]:
        """
        Embed a single text, e.g. a question.
        """
        vectors = await self.embed([text])
        return vectors[0]

    # ============================================================
    # HEALTH CHECK
    # ============================================================

    def health_check(self) -> dict:

        return {
            "model": self._model,
            "provider": "openai",
            "configured": self._client is not None or bool(get_api_key()),
        }
