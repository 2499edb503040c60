"""MongoDB storage over pymongo's asyncio client."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from easycollection.storage.protocol import SortSpec

LOGGER = logging.getLogger(__name__)


class MongoCollection:
    """Storage collection backed by an ``AsyncCollection``."""

    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection

    async def insert_one(self, document: dict[str, Any]) -> dict[str, Any]:
        await self._collection.insert_one(document)
        return document

    async def find(
        self, query: Mapping[str, Any], sort: SortSpec = ()
    ) -> list[dict[str, Any]]:
        cursor = self._collection.find(dict(query))
        if sort:
            cursor = cursor.sort(list(sort))
        return await cursor.to_list()

    async def find_one_and_update(
        self, query: Mapping[str, Any], update: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        return await self._collection.find_one_and_update(
            dict(query),
            dict(update),
            upsert=False,
            return_document=ReturnDocument.AFTER,
        )

    async def find_one_and_delete(
        self, query: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        return await self._collection.find_one_and_delete(dict(query))

    async def count(self) -> int:
        return await self._collection.count_documents({})


class MongoDatabase:
    """Storage database backed by an ``AsyncDatabase``."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._database = database

    @classmethod
    def connect(
        cls,
        uri: str,
        database: str,
        *,
        server_selection_timeout_ms: int = 5000,
    ) -> "MongoDatabase":
        """Open a client for ``uri`` and bind the named database."""
        client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            uri, serverSelectionTimeoutMS=server_selection_timeout_ms
        )
        LOGGER.debug("Opened MongoDB client for database %s", database)
        return cls(client[database])

    def collection(self, name: str) -> MongoCollection:
        return MongoCollection(self._database[name])

    async def list_collection_names(self, name: str) -> list[str]:
        return await self._database.list_collection_names(filter={"name": name})

    async def close(self) -> None:
        await self._database.client.close()
