"""MongoDB-backed record store using the pymongo async client."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pymongo import AsyncMongoClient
from pymongo.server_api import ServerApi

logger = logging.getLogger("resume_builder.persistence")


class MongoRecordStore:
    """Inserts submissions into one MongoDB collection."""

    def __init__(
        self,
        uri: str,
        database_name: str = "USERS",
        collection_name: str = "USERS",
        client: Optional[AsyncMongoClient] = None,
    ) -> None:
        self._uri = uri
        self.database_name = database_name
        self.collection_name = collection_name
        self._client = client

    # -- lifecycle -----------------------------------------------------------

    async def start(self) -> None:
        if self._client is None:
            self._client = AsyncMongoClient(
                self._uri,
                server_api=ServerApi("1", strict=True, deprecation_errors=True),
            )
        await self._client.admin.command("ping")
        logger.info("Pinged MongoDB deployment db=%s collection=%s", self.database_name, self.collection_name)

    async def stop(self) -> None:
        if self._client is not None:
            logger.info("Closing MongoDB client...")
            await self._client.close()
            self._client = None

    # -- records -------------------------------------------------------------

    async def insert(self, document: Dict[str, Any]) -> None:
        if self._client is None:
            raise RuntimeError("MongoDB client is not connected")
        collection = self._client[self.database_name][self.collection_name]
        # insert_one adds ``_id`` to the mapping it receives.
        await collection.insert_one(dict(document))
