"""Provider protocol definition."""

from __future__ import annotations

from typing import Protocol


class TextProvider(Protocol):
    """Protocol for text generation providers: prompt in, text out."""

    async def generate(self, prompt: str) -> str: ...
