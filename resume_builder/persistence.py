"""Best-effort capture of raw submissions.

Recording never blocks or fails resume generation: each insert runs as a
detached task whose errors are logged and dropped.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from .errors import PersistenceError
from .redaction import redact_text
from .stores.protocol import RecordStore
from .submission import Submission

logger = logging.getLogger("resume_builder.persistence")


def build_record(submission: Submission, created_at: Optional[datetime] = None) -> Dict[str, Any]:
    """Submission fields plus the server-assigned ``createdAt`` stamp."""
    record: Dict[str, Any] = submission.to_document()
    record["createdAt"] = created_at or datetime.now(timezone.utc)
    return record


class SubmissionRecorder:
    """Schedules inserts into the record store without awaiting them."""

    def __init__(self, store: Optional[RecordStore]) -> None:
        self._store = store
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def record(self, submission: Submission) -> Optional[asyncio.Task]:
        """Start the insert in the background and return its task."""
        if self._store is None:
            logger.warning("Record store not initialized; submission was NOT saved")
            return None

        task = asyncio.create_task(self._insert(build_record(submission)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _insert(self, record: Dict[str, Any]) -> bool:
        try:
            await self._store.insert(record)
        except Exception as exc:
            error = PersistenceError(detail=str(exc))
            logger.error(
                "submission_save_failed code=%s name=%s detail=%s",
                error.code,
                redact_text(record.get("name", "")),
                redact_text(error.detail),
                exc_info=exc,
            )
            return False
        logger.info("User data for %s saved.", redact_text(record.get("name", "")))
        return True

    async def drain(self) -> None:
        """Wait for in-flight inserts; used before the store shuts down."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
