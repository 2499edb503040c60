"""Storage backends and contracts."""

from easycollection.storage.factory import create_database
from easycollection.storage.memory import MemoryCollection, MemoryDatabase
from easycollection.storage.mongo import MongoCollection, MongoDatabase
from easycollection.storage.protocol import SortSpec, StorageCollection, StorageDatabase

__all__ = [
    "MemoryCollection",
    "MemoryDatabase",
    "MongoCollection",
    "MongoDatabase",
    "SortSpec",
    "StorageCollection",
    "StorageDatabase",
    "create_database",
]
