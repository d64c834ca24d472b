"""In-memory record store for local development and tests."""

from __future__ import annotations

import asyncio
import copy
from typing import Any, Dict, List


class InMemoryRecordStore:
    """Keeps inserted documents in a list for the lifetime of the process."""

    def __init__(self) -> None:
        self._documents: List[Dict[str, Any]] = []
        self._lock = asyncio.Lock()
        self.started = False

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.started = False

    async def insert(self, document: Dict[str, Any]) -> None:
        async with self._lock:
            self._documents.append(copy.deepcopy(document))

    @property
    def documents(self) -> List[Dict[str, Any]]:
        return list(self._documents)
