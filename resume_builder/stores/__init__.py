"""Record store factory."""

from __future__ import annotations

from pathlib import Path

from ..config import ServiceConfig
from ..errors import ConfigurationError
from .memory_store import InMemoryRecordStore
from .mongo_store import MongoRecordStore
from .protocol import RecordStore
from .sqlite_store import SQLiteRecordStore

SQLITE_PREFIX = "sqlite:///"


def create_record_store(config: ServiceConfig) -> RecordStore:
    """Pick a store implementation from the scheme of the database URI."""
    uri = config.database_uri.strip()
    if not uri:
        raise ConfigurationError("MONGODB_URI not set")

    if uri.startswith(("mongodb://", "mongodb+srv://")):
        return MongoRecordStore(
            uri,
            database_name=config.database_name,
            collection_name=config.collection_name,
        )
    if uri.startswith(SQLITE_PREFIX):
        db_path = uri[len(SQLITE_PREFIX):]
        if not db_path:
            raise ConfigurationError("sqlite URI must name a database file")
        return SQLiteRecordStore(Path(db_path))
    if uri == "memory://":
        return InMemoryRecordStore()

    scheme = uri.split(":", 1)[0]
    raise ConfigurationError(f"Unsupported database URI scheme: {scheme!r}")


__all__ = [
    "InMemoryRecordStore",
    "MongoRecordStore",
    "RecordStore",
    "SQLiteRecordStore",
    "create_record_store",
]
