"""Retry logic with exponential backoff for generation calls."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""
    max_attempts: int = 1
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter_factor: float = 0.2  # ±20% random variation


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    config: RetryConfig,
    *args: Any,
    **kwargs: Any
) -> T:
    """
    Await ``func`` and retry transient failures with exponential backoff.

    Non-transient errors, and the last transient one, propagate unchanged.
    """
    attempts = max(config.max_attempts, 1)

    for attempt in range(attempts):
        try:
            result = await func(*args, **kwargs)
            if attempt > 0:
                logger.info("Retry succeeded on attempt %d", attempt + 1)
            return result

        except asyncio.CancelledError:
            raise

        except Exception as e:
            if not is_transient_error(e) or attempt == attempts - 1:
                raise

            base_delay = min(
                config.base_delay * (config.exponential_base ** attempt),
                config.max_delay
            )
            jitter = base_delay * config.jitter_factor * (2 * random.random() - 1)
            delay = base_delay + jitter

            logger.warning(
                "Attempt %d/%d failed: %s. Retrying in %.2fs...",
                attempt + 1,
                attempts,
                e,
                delay,
            )
            await asyncio.sleep(delay)

    raise AssertionError("unreachable")


def is_transient_error(error: BaseException) -> bool:
    """
    Determine if an error is transient and should be retried.

    The error's cause chain is inspected too, since providers wrap SDK errors.
    """
    current: BaseException | None = error
    while current is not None:
        if isinstance(current, (ConnectionError, TimeoutError, asyncio.TimeoutError)):
            return True

        error_msg = str(current).lower()
        transient_patterns = [
            "timeout",
            "timed out",
            "rate limit",
            "429",
            "500",
            "503",
            "504",
            "connection reset",
            "temporarily",
            "unavailable",
        ]
        if any(pattern in error_msg for pattern in transient_patterns):
            return True
        current = current.__cause__

    return False
