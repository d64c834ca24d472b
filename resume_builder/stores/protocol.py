"""RecordStore protocol, the contract every submission store implements."""

from __future__ import annotations

from typing import Any, Dict, runtime_checkable

from typing_extensions import Protocol


@runtime_checkable
class RecordStore(Protocol):
    """Insert-only document store for raw submissions."""

    # -- lifecycle -----------------------------------------------------------
    async def start(self) -> None:
        """Connect and verify the store is reachable; raise on failure."""
        ...

    async def stop(self) -> None: ...

    # -- records -------------------------------------------------------------
    async def insert(self, document: Dict[str, Any]) -> None: ...
