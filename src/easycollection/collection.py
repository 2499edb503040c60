"""Validated, hooked CRUD operations over a named store collection."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from bson import ObjectId

from easycollection.config.models import AppConfig
from easycollection.errors import (
    BulkRemoveError,
    InvalidIdentifierError,
    NotFoundError,
)
from easycollection.hooks.pipeline import HookConfig, HookPipeline
from easycollection.identifiers import to_object_id
from easycollection.schemas.model_spec import Model, parse_model
from easycollection.storage.protocol import SortSpec, StorageCollection, StorageDatabase

LOGGER = logging.getLogger(__name__)


class Collection:
    """Store collection whose writes are validated and reads are filtered.

    Inserts and updates run the registered validator (if any) and then the
    collection model. Every document handed back to callers passes through
    the read filter. Removals run the pre-remove chain first and are skipped
    when any callback fails.
    """

    def __init__(
        self,
        database: StorageDatabase,
        name: str,
        model: Model | Mapping[str, Any] | None = None,
        *,
        hooks: HookConfig | None = None,
        sort: SortSpec = (),
    ) -> None:
        self.database = database
        self.name = name
        self.model: Model | None = parse_model(model) if model is not None else None
        self.sort: tuple[tuple[str, int], ...] = tuple(sort)
        self.hooks = hooks or HookConfig()
        self._pipeline = HookPipeline(self.model, self.hooks)

    @property
    def storage(self) -> StorageCollection:
        """Return the underlying store collection handle."""
        return self.database.collection(self.name)

    @classmethod
    async def exists(cls, database: StorageDatabase, name: str) -> bool:
        """Return whether the store lists exactly one collection called ``name``."""
        names = await database.list_collection_names(name)
        return len(names) == 1

    def to_object_id(self, identifier: Any) -> ObjectId | None:
        """Normalize ``identifier``; malformed values yield None."""
        return to_object_id(identifier)

    def _require_object_id(self, identifier: Any) -> ObjectId:
        object_id = to_object_id(identifier)
        if object_id is None:
            raise InvalidIdentifierError(
                f"Invalid identifier for {self.name}: {identifier!r}",
                identifier=repr(identifier),
            )
        return object_id

    async def insert(self, document: Mapping[str, Any]) -> dict[str, Any]:
        """Validate and insert a document, returning the filtered stored copy."""
        candidate = await self._pipeline.apply_validator(document, is_insert=True)
        stored = await self.storage.insert_one(candidate)
        LOGGER.debug("Inserted %s into %s", stored.get("_id"), self.name)
        return await self._pipeline.apply_filter(stored)

    async def find(
        self,
        query: Mapping[str, Any] | None = None,
        *,
        find_one: bool = False,
    ) -> Any:
        """Return filtered matches in the collection sort order.

        With ``find_one`` only the first match is returned, or None when
        nothing matches.
        """
        results = await self.storage.find(dict(query or {}), self.sort)
        if find_one:
            if not results:
                return None
            return await self._pipeline.apply_filter(results[0])
        return await self._pipeline.filter_all(results)

    async def find_one(self, query: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        return await self.find(query, find_one=True)

    async def find_by_id(self, identifier: Any) -> dict[str, Any] | None:
        object_id = self._require_object_id(identifier)
        return await self.find({"_id": object_id}, find_one=True)

    async def update_by_id(
        self,
        identifier: Any,
        patch: Mapping[str, Any],
        *,
        where: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Validate ``patch`` and ``$set`` it on the identified document.

        ``where`` narrows the match further; a document that exists but does
        not satisfy it is reported as not found.
        """
        object_id = self._require_object_id(identifier)
        candidate = await self._pipeline.apply_validator(
            patch, is_insert=False, identifier=object_id
        )
        query = {**dict(where or {}), "_id": object_id}
        updated = await self.storage.find_one_and_update(query, {"$set": candidate})
        if updated is None:
            raise NotFoundError(
                f"No document in {self.name} matches {object_id}",
                identifier=str(object_id),
            )
        return await self._pipeline.apply_filter(updated)

    find_and_modify = update_by_id

    async def remove_by_id(self, identifier: Any) -> dict[str, Any]:
        """Run the pre-remove chain, then delete and return the document."""
        object_id = self._require_object_id(identifier)
        await self._pipeline.run_pre_remove(object_id)
        removed = await self.storage.find_one_and_delete({"_id": object_id})
        if removed is None:
            raise NotFoundError(
                f"No document in {self.name} matches {object_id}",
                identifier=str(object_id),
            )
        LOGGER.debug("Removed %s from %s", object_id, self.name)
        return await self._pipeline.apply_filter(removed)

    async def remove(self, query: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """Remove every match concurrently; raise if any single removal failed."""
        matches = await self.storage.find(dict(query or {}), self.sort)
        identifiers = [document["_id"] for document in matches]
        results = await asyncio.gather(
            *(self.remove_by_id(identifier) for identifier in identifiers),
            return_exceptions=True,
        )

        removed: list[dict[str, Any]] = []
        failures: list[tuple[Any, BaseException]] = []
        for identifier, result in zip(identifiers, results):
            if isinstance(result, BaseException):
                failures.append((identifier, result))
            else:
                removed.append(result)
        if failures:
            LOGGER.warning(
                "Bulk remove on %s: %d removed, %d failed",
                self.name,
                len(removed),
                len(failures),
            )
            raise BulkRemoveError(removed, failures)
        return removed

    async def count(self) -> int:
        return await self.storage.count()


def create_collection(
    database: StorageDatabase,
    name: str,
    config: AppConfig,
    hooks: HookConfig | None = None,
) -> Collection:
    """Build a collection from its configured model and sort order."""
    collection_config = config.collection_config(name)
    return Collection(
        database,
        name,
        collection_config.model,
        hooks=hooks,
        sort=collection_config.sort,
    )
