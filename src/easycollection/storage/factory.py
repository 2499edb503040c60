"""Storage backend selection."""

from __future__ import annotations

from easycollection.config.models import StorageConfig
from easycollection.schemas.enums import StorageBackend
from easycollection.storage.memory import MemoryDatabase
from easycollection.storage.mongo import MongoDatabase
from easycollection.storage.protocol import StorageDatabase


def create_database(config: StorageConfig) -> StorageDatabase:
    """Create the configured storage database handle."""
    if config.backend == StorageBackend.MEMORY:
        return MemoryDatabase()
    return MongoDatabase.connect(
        config.uri,
        config.database,
        server_selection_timeout_ms=config.server_selection_timeout_ms,
    )
