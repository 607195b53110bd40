# app/llm/client.py
import logging
import time
from typing import Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from app.config import (
    LLM_TEMPERATURE,
    MODEL_CHAT,
    OPENAI_BASE_URL,
    OPENAI_PROJECT,
    get_api_key,
)
from app.errors import ConfigError, UpstreamError

logger = logging.getLogger(__name__)


class LLMClient:
    """
    Client for the OpenAI chat-completion API.

    Exposes a single capability, ``complete(messages) -> text``,
    so tests can swap in a deterministic double.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: str = MODEL_CHAT,
        temperature: float = LLM_TEMPERATURE,
    ):
        """
        Args:
            client: Pre-built SDK client. Built lazily from the
                environment when omitted.
            model: Chat model to use (default: gpt-4o-mini)
            temperature: Sampling temperature
        """
        self._client = client
        self.model = model
        self.temperature = temperature

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

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Send one chat-completion request.

        Args:
            messages: OpenAI-style ``{"role", "content"}`` dicts

        Returns:
            The model's raw text, or an empty string when it returned none

        Raises:
            ConfigError: no API key configured
            UpstreamError: the API call failed
        """
        client = self._get_client()

        start_time = time.time()

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
            )
        except OpenAIError as e:
            logger.error(
                "Chat completion failed",
                extra={"model": self.model, "error": str(e), "error_type": type(e).__name__},
            )
            raise UpstreamError(str(e)) from e

        logger.info(
            "Chat completion succeeded",
            extra={
                "model": self.model,
                "latency_seconds": round(time.time() - start_time, 3),
            },
        )

        if not response.choices:
            return ""

        return response.choices[0].message.content or ""
