"""Provider-agnostic generation settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

# Content-safety categories the service opts out of blocking. Resume text is
# low-risk; this is not a general recommendation.
UNBLOCKED_HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


@dataclass
class GenerationConfig:
    """Common generation settings passed to providers."""

    unblocked_categories: List[str] = field(default_factory=lambda: list(UNBLOCKED_HARM_CATEGORIES))
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
