"""Identifier normalization tests."""

from __future__ import annotations

from bson import ObjectId

from easycollection.identifiers import to_object_id


def test_native_identifier_passes_through() -> None:
    """ObjectIds are returned as-is."""
    object_id = ObjectId()
    assert to_object_id(object_id) is object_id


def test_hex_string_is_parsed() -> None:
    """Canonical string forms normalize to the native key."""
    object_id = ObjectId()
    assert to_object_id(str(object_id)) == object_id


def test_malformed_values_normalize_to_none() -> None:
    """Malformed keys never raise."""
    assert to_object_id("not-a-valid-id") is None
    assert to_object_id("") is None
    assert to_object_id(None) is None
    assert to_object_id(12) is None
