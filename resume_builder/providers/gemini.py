"""Gemini provider implementation."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from ..errors import GenerationError
from .types import GenerationConfig

logger = logging.getLogger(__name__)


class GeminiProvider:
    """Google Gemini provider using google-genai SDK."""

    def __init__(
        self,
        api_key: str,
        model: str,
        config: Optional[GenerationConfig] = None,
    ) -> None:
        self.model = model
        self.config = config or GenerationConfig()
        self._api_key = api_key
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        # Built on first use: the SDK rejects a missing key at construction,
        # and a missing key must only fail individual requests.
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=prompt,
                config=self._to_gemini_config(),
            )
        except Exception as exc:
            raise GenerationError(detail=f"{self.model} call failed: {exc}") from exc

        return self._response_text(response)

    def _to_gemini_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            safety_settings=self._safety_settings(),
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_tokens,
        )

    def _safety_settings(self) -> List[types.SafetySetting]:
        return [
            types.SafetySetting(
                category=types.HarmCategory(category),
                threshold=types.HarmBlockThreshold.BLOCK_NONE,
            )
            for category in self.config.unblocked_categories
        ]

    def _response_text(self, response: Any) -> str:
        """Text of the first part of the first candidate, or ``""``.

        A response without candidates or parts (for example one withheld by
        the model) degrades to an empty section instead of failing the request.
        """
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            logger.warning("Empty LLM response: no candidates")
            return ""
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        if not parts:
            logger.warning("Empty LLM response: no parts")
            return ""
        return getattr(parts[0], "text", None) or ""
