"""In-process storage with MongoDB-like semantics for tests and demos."""

from __future__ import annotations

import asyncio
import copy
import functools
from typing import Any, Callable, Mapping

from bson import ObjectId

from easycollection.storage.protocol import SortSpec

_MISSING = object()


def _lookup(document: Mapping[str, Any], path: str) -> Any:
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _compare(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(value: Any, operand: Any) -> bool:
        if value is _MISSING:
            return False
        try:
            return op(value, operand)
        except TypeError:
            return False

    return check


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "$eq": lambda value, operand: value is not _MISSING and value == operand,
    "$ne": lambda value, operand: value is _MISSING or value != operand,
    "$in": lambda value, operand: value is not _MISSING and value in operand,
    "$nin": lambda value, operand: value is _MISSING or value not in operand,
    "$exists": lambda value, operand: (value is not _MISSING) == bool(operand),
    "$gt": _compare(lambda value, operand: value > operand),
    "$gte": _compare(lambda value, operand: value >= operand),
    "$lt": _compare(lambda value, operand: value < operand),
    "$lte": _compare(lambda value, operand: value <= operand),
}


def matches(document: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    """Return whether ``document`` satisfies a MongoDB-style ``query``."""
    for path, condition in query.items():
        value = _lookup(document, path)
        if isinstance(condition, Mapping) and condition and all(
            str(key).startswith("$") for key in condition
        ):
            for operator, operand in condition.items():
                check = _OPERATORS.get(operator)
                if check is None:
                    raise ValueError(f"Unsupported query operator: {operator}")
                if not check(value, operand):
                    return False
        elif value is _MISSING:
            if condition is not None:
                return False
        elif value != condition:
            return False
    return True


def _sort_documents(documents: list[dict[str, Any]], sort: SortSpec) -> list[dict[str, Any]]:
    def compare(left: dict[str, Any], right: dict[str, Any]) -> int:
        for path, direction in sort:
            a, b = _lookup(left, path), _lookup(right, path)
            if a == b:
                continue
            # Missing fields sort first, like null in MongoDB.
            if a is _MISSING:
                order = -1
            elif b is _MISSING:
                order = 1
            else:
                try:
                    order = -1 if a < b else 1
                except TypeError:
                    order = -1 if type(a).__name__ < type(b).__name__ else 1
            return order if direction >= 0 else -order
        return 0

    return sorted(documents, key=functools.cmp_to_key(compare))


class MemoryCollection:
    """Ordered in-memory collection; all reads and writes copy documents."""

    def __init__(self, name: str, on_first_insert: Callable[[str], None]) -> None:
        self.name = name
        self._documents: dict[Any, dict[str, Any]] = {}
        self._on_first_insert = on_first_insert
        self._lock = asyncio.Lock()

    async def insert_one(self, document: dict[str, Any]) -> dict[str, Any]:
        async with self._lock:
            stored = copy.deepcopy(document)
            stored.setdefault("_id", ObjectId())
            if stored["_id"] in self._documents:
                raise ValueError(f"Duplicate key: {stored['_id']}")
            self._documents[stored["_id"]] = stored
            self._on_first_insert(self.name)
            return copy.deepcopy(stored)

    async def find(
        self, query: Mapping[str, Any], sort: SortSpec = ()
    ) -> list[dict[str, Any]]:
        found = [
            copy.deepcopy(document)
            for document in self._documents.values()
            if matches(document, query)
        ]
        return _sort_documents(found, sort) if sort else found

    async def find_one_and_update(
        self, query: Mapping[str, Any], update: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        unsupported = set(update) - {"$set"}
        if unsupported:
            raise ValueError(f"Unsupported update operator(s): {sorted(unsupported)}")
        async with self._lock:
            target = self._first_match(query)
            if target is None:
                return None
            for path, value in update.get("$set", {}).items():
                _assign(target, path, copy.deepcopy(value))
            return copy.deepcopy(target)

    async def find_one_and_delete(
        self, query: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        async with self._lock:
            target = self._first_match(query)
            if target is None:
                return None
            return self._documents.pop(target["_id"])

    async def count(self) -> int:
        return len(self._documents)

    def _first_match(self, query: Mapping[str, Any]) -> dict[str, Any] | None:
        for document in self._documents.values():
            if matches(document, query):
                return document
        return None


def _assign(document: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    target = document
    for part in parts[:-1]:
        target = target.setdefault(part, {})
    target[parts[-1]] = value


class MemoryDatabase:
    """In-memory database; collections are listed once they hold data."""

    def __init__(self) -> None:
        self._collections: dict[str, MemoryCollection] = {}
        self._created: set[str] = set()

    def collection(self, name: str) -> MemoryCollection:
        if name not in self._collections:
            self._collections[name] = MemoryCollection(name, self._created.add)
        return self._collections[name]

    async def list_collection_names(self, name: str) -> list[str]:
        return [existing for existing in sorted(self._created) if existing == name]

    async def drop(self) -> None:
        self._collections.clear()
        self._created.clear()

    async def close(self) -> None:
        return
