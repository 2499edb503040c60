"""In-memory storage backend tests."""

from __future__ import annotations

import pytest
from bson import ObjectId

from easycollection.storage.memory import MemoryDatabase, matches


def test_query_matching_supports_operators_and_paths() -> None:
    """Equality, dotted paths and comparison operators are honoured."""
    document = {"name": "a", "age": 10, "resources": {"create": 5}}
    assert matches(document, {})
    assert matches(document, {"name": "a"})
    assert matches(document, {"resources.create": 5})
    assert matches(document, {"age": {"$gte": 10, "$lt": 11}})
    assert matches(document, {"name": {"$in": ["a", "b"]}})
    assert matches(document, {"missing": {"$exists": False}})
    assert matches(document, {"age": {"$ne": 3}})
    assert not matches(document, {"age": {"$gt": 10}})
    assert not matches(document, {"name": {"$nin": ["a"]}})
    assert matches(document, {"missing": None})
    assert not matches(document, {"age": {"$gt": "ten"}})


def test_unknown_operator_raises() -> None:
    """Unsupported query operators are reported."""
    with pytest.raises(ValueError):
        matches({"a": 1}, {"a": {"$regex": "x"}})


@pytest.mark.asyncio
async def test_insert_assigns_identifier_and_copies() -> None:
    """Stored documents are isolated from caller mutation."""
    database = MemoryDatabase()
    collection = database.collection("games")
    payload = {"title": "My title"}
    stored = await collection.insert_one(payload)
    assert isinstance(stored["_id"], ObjectId)
    assert "_id" not in payload

    stored["title"] = "changed"
    found = await collection.find({"_id": stored["_id"]})
    assert found[0]["title"] == "My title"


@pytest.mark.asyncio
async def test_find_sorts_by_multiple_keys() -> None:
    """Sort specs order by each key in turn, honouring direction."""
    collection = MemoryDatabase().collection("games")
    for title, year in (("b", 2000), ("a", 2001), ("c", 2000)):
        await collection.insert_one({"title": title, "year": year})
    ordered = await collection.find({}, [("year", -1), ("title", 1)])
    assert [doc["title"] for doc in ordered] == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_update_and_delete_return_documents() -> None:
    """Updates return the post-image; deletes return the removed document."""
    collection = MemoryDatabase().collection("games")
    stored = await collection.insert_one({"title": "old"})
    updated = await collection.find_one_and_update(
        {"_id": stored["_id"]}, {"$set": {"title": "new", "meta.rank": 1}}
    )
    assert updated is not None
    assert updated["title"] == "new"
    assert updated["meta"] == {"rank": 1}
    assert await collection.find_one_and_update({"_id": ObjectId()}, {"$set": {"a": 1}}) is None

    removed = await collection.find_one_and_delete({"_id": stored["_id"]})
    assert removed is not None and removed["title"] == "new"
    assert await collection.count() == 0
    assert await collection.find_one_and_delete({"_id": stored["_id"]}) is None


@pytest.mark.asyncio
async def test_unsupported_update_operator_raises() -> None:
    """Only ``$set`` updates are supported."""
    collection = MemoryDatabase().collection("games")
    stored = await collection.insert_one({"n": 1})
    with pytest.raises(ValueError):
        await collection.find_one_and_update({"_id": stored["_id"]}, {"$inc": {"n": 1}})


@pytest.mark.asyncio
async def test_collections_are_listed_after_first_insert() -> None:
    """Opening a handle does not create the collection."""
    database = MemoryDatabase()
    collection = database.collection("lazy")
    assert await database.list_collection_names("lazy") == []
    await collection.insert_one({})
    assert await database.list_collection_names("lazy") == ["lazy"]
    assert await database.list_collection_names("other") == []
