"""Provider factory and defaults."""

from __future__ import annotations

from ..config import ServiceConfig
from .base import TextProvider
from .gemini import GeminiProvider
from .types import UNBLOCKED_HARM_CATEGORIES, GenerationConfig


def create_provider(config: ServiceConfig) -> TextProvider:
    # A missing key is not fatal here: every call then fails at request time.
    return GeminiProvider(
        api_key=config.google_api_key,
        model=config.model,
        config=GenerationConfig(),
    )


__all__ = [
    "GeminiProvider",
    "GenerationConfig",
    "TextProvider",
    "UNBLOCKED_HARM_CATEGORIES",
    "create_provider",
]
