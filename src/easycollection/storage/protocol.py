"""Storage contracts consumed by collections."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

SortSpec = Sequence[tuple[str, int]]


class StorageCollection(Protocol):
    """Named collection handle of a document store."""

    async def insert_one(self, document: dict[str, Any]) -> dict[str, Any]:
        """Persist a document and return it with its assigned ``_id``."""

    async def find(
        self, query: Mapping[str, Any], sort: SortSpec = ()
    ) -> list[dict[str, Any]]:
        """Return every matching document in sort order."""

    async def find_one_and_update(
        self, query: Mapping[str, Any], update: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        """Atomically update one match and return it after the update."""

    async def find_one_and_delete(
        self, query: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        """Atomically delete one match and return it as it was stored."""

    async def count(self) -> int:
        """Return the number of stored documents."""


class StorageDatabase(Protocol):
    """Database handle listing and opening named collections."""

    def collection(self, name: str) -> StorageCollection:
        """Return the handle for collection ``name``."""

    async def list_collection_names(self, name: str) -> list[str]:
        """Return existing collection names equal to ``name``."""

    async def close(self) -> None:
        """Release client resources."""
