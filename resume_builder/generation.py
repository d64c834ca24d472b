"""Concurrent section generation and response normalization."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

import markdown

from .errors import GenerationError
from .prompts import SectionPrompts
from .providers.base import TextProvider
from .retry import RetryConfig, retry_with_backoff

logger = logging.getLogger(__name__)

NA_SENTINEL = "NA"
MARKDOWN_EXTENSIONS = ["sane_lists"]

_LIST_ITEM_RE = re.compile(r"^\s*(?:[*+-]|\d+\.)\s+")


@dataclass(frozen=True)
class GenerationResults:
    """Raw model text per section; ``""`` when the response had no text."""

    skills: str
    experience: str
    projects: str
    achievements: str


@dataclass(frozen=True)
class NormalizedSections:
    """Section values in the shape the resume template consumes."""

    skills: str
    experience: str
    projects: str
    achievements: str


async def generate_sections(
    provider: TextProvider,
    prompts: SectionPrompts,
    retry: Optional[RetryConfig] = None,
    timeout_seconds: float = 0.0,
) -> GenerationResults:
    """Run the four prompts concurrently and wait for all of them.

    There is no partial result: if any call fails the whole request fails.
    """
    retry = retry or RetryConfig()

    async def _one(prompt: str) -> str:
        if timeout_seconds > 0:
            return await asyncio.wait_for(provider.generate(prompt), timeout_seconds)
        return await provider.generate(prompt)

    try:
        skills, experience, projects, achievements = await asyncio.gather(
            retry_with_backoff(_one, retry, prompts.skills),
            retry_with_backoff(_one, retry, prompts.experience),
            retry_with_backoff(_one, retry, prompts.projects),
            retry_with_backoff(_one, retry, prompts.achievements),
        )
    except GenerationError:
        raise
    except asyncio.TimeoutError as exc:
        raise GenerationError(detail=f"generation timed out after {timeout_seconds}s") from exc
    except Exception as exc:
        raise GenerationError(detail=str(exc)) from exc

    return GenerationResults(
        skills=skills,
        experience=experience,
        projects=projects,
        achievements=achievements,
    )


def normalize_section(raw: str) -> str:
    """Map empty or ``NA`` text to the sentinel, otherwise Markdown to HTML."""
    text = (raw or "").strip()
    if not text or text.upper() == NA_SENTINEL:
        return NA_SENTINEL
    return markdown.markdown(_separate_lists(raw), extensions=MARKDOWN_EXTENSIONS)


def _separate_lists(text: str) -> str:
    # Python-Markdown only starts a list after a blank line; model output
    # often puts "Highlights:" directly above the first bullet.
    lines: List[str] = []
    for line in text.splitlines():
        if lines and lines[-1].strip() and _LIST_ITEM_RE.match(line) and not _LIST_ITEM_RE.match(lines[-1]):
            lines.append("")
        lines.append(line)
    return "\n".join(lines)


def normalize_sections(results: GenerationResults) -> NormalizedSections:
    # Skills stay a plain comma-separated string.
    return NormalizedSections(
        skills=results.skills,
        experience=normalize_section(results.experience),
        projects=normalize_section(results.projects),
        achievements=normalize_section(results.achievements),
    )
