"""Enum definitions for canonical contracts."""

from __future__ import annotations

from enum import Enum


class FieldKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    OTHER = "other"


class ErrorKind(str, Enum):
    INVALID_DOCUMENT = "E_INVALID_DOCUMENT"
    NOT_FOUND = "E_NOT_FOUND"
    INVALID_IDENTIFIER = "E_INVALID_IDENTIFIER"
    HOOK_FAILED = "E_HOOK_FAILED"
    BULK_REMOVE_FAILED = "E_BULK_REMOVE_FAILED"


class StorageBackend(str, Enum):
    MONGO = "mongo"
    MEMORY = "memory"


FIELD_KIND_ALIASES: dict[str, FieldKind] = {
    "string": FieldKind.STRING,
    "str": FieldKind.STRING,
    "number": FieldKind.NUMBER,
    "int": FieldKind.NUMBER,
    "float": FieldKind.NUMBER,
    "boolean": FieldKind.BOOLEAN,
    "bool": FieldKind.BOOLEAN,
    "object": FieldKind.OBJECT,
    "dict": FieldKind.OBJECT,
    "mapping": FieldKind.OBJECT,
    "array": FieldKind.ARRAY,
    "list": FieldKind.ARRAY,
    "other": FieldKind.OTHER,
}

STORAGE_BACKEND_ALIASES: dict[str, StorageBackend] = {
    "mongo": StorageBackend.MONGO,
    "mongodb": StorageBackend.MONGO,
    "memory": StorageBackend.MEMORY,
    "in-memory": StorageBackend.MEMORY,
    "in_memory": StorageBackend.MEMORY,
}


def normalize_field_kind(raw_value: str | FieldKind) -> FieldKind:
    """Normalize field type labels into canonical enum values."""
    if isinstance(raw_value, FieldKind):
        return raw_value
    normalized = FIELD_KIND_ALIASES.get(raw_value.strip().lower())
    if normalized is None:
        raise ValueError(f"Unsupported field type: {raw_value}")
    return normalized


def normalize_storage_backend(raw_value: str | StorageBackend) -> StorageBackend:
    """Normalize storage backend labels into canonical enum values."""
    if isinstance(raw_value, StorageBackend):
        return raw_value
    normalized = STORAGE_BACKEND_ALIASES.get(raw_value.strip().lower())
    if normalized is None:
        raise ValueError(f"Unsupported storage backend: {raw_value}")
    return normalized
