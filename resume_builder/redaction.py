"""Masking of personal data in log lines."""

from __future__ import annotations

import re

# Order matters: keys and emails before phone numbers, whose pattern is loose.
_RULES = (
    (re.compile(r"\bAIza[0-9A-Za-z_-]{20,}\b"), "[REDACTED_KEY]"),
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[REDACTED_EMAIL]"),
    (re.compile(r"\+?\d[\d\s().-]{7,}\d"), "[REDACTED_PHONE]"),
)


def redact_text(value: str, max_length: int = 200) -> str:
    """Mask keys, emails and phone numbers in ``value`` and cap its length."""
    text = value or ""
    for pattern, replacement in _RULES:
        text = pattern.sub(replacement, text)
    if len(text) > max_length:
        text = text[:max_length] + "..."
    return text
