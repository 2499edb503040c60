"""Store identifier normalization."""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId


def to_object_id(value: Any) -> ObjectId | None:
    """Normalize native or hex-string identifiers; malformed input yields None."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None
