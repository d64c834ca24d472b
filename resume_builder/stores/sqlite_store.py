"""SQLite-backed record store for single-host deployments."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiosqlite

logger = logging.getLogger("resume_builder.persistence")

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS submissions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT NOT NULL,
    created_at TEXT NOT NULL,
    document_json TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_submissions_email ON submissions(email);
"""


def _json_default(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class SQLiteRecordStore:
    """Stores each submission as a JSON document row."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._db: Optional[aiosqlite.Connection] = None

    # -- lifecycle -----------------------------------------------------------

    async def start(self) -> None:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(str(self._db_path))
        self._db.row_factory = aiosqlite.Row
        await self._db.execute("PRAGMA journal_mode=WAL")
        await self._db.executescript(_SCHEMA_SQL)
        await self._db.commit()
        await self._db.execute("SELECT 1")
        logger.info("SQLite record store ready path=%s", self._db_path)

    async def stop(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    # -- records -------------------------------------------------------------

    async def insert(self, document: Dict[str, Any]) -> None:
        if self._db is None:
            raise RuntimeError("SQLite record store is not started")
        created_at = document.get("createdAt")
        created_at_text = created_at.isoformat() if isinstance(created_at, datetime) else str(created_at or "")
        await self._db.execute(
            "INSERT INTO submissions (email, created_at, document_json) VALUES (?, ?, ?)",
            (
                str(document.get("email", "")),
                created_at_text,
                json.dumps(document, default=_json_default, ensure_ascii=False),
            ),
        )
        await self._db.commit()

    async def list_documents(self) -> List[Dict[str, Any]]:
        if self._db is None:
            raise RuntimeError("SQLite record store is not started")
        async with self._db.execute("SELECT document_json FROM submissions ORDER BY id") as cursor:
            rows = await cursor.fetchall()
        return [json.loads(row["document_json"]) for row in rows]
