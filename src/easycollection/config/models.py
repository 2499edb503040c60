"""Pydantic models for central YAML configuration."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, field_validator

from easycollection.constants import SCHEMA_VERSION
from easycollection.schemas.base import StrictSchemaModel
from easycollection.schemas.enums import StorageBackend, normalize_storage_backend
from easycollection.schemas.model_spec import Model, parse_model


class StorageConfig(StrictSchemaModel):
    """Document store connection settings."""

    backend: StorageBackend = StorageBackend.MONGO
    uri: str = Field(default="mongodb://127.0.0.1:27017", min_length=1)
    database: str = Field(default="easy-collection", min_length=1)
    server_selection_timeout_ms: int = Field(default=5000, gt=0)

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, value: str | StorageBackend) -> StorageBackend:
        return normalize_storage_backend(value)


class LoggingConfig(StrictSchemaModel):
    """Log level for the package loggers."""

    level: str = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        normalized = str(value).strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown log level: {value}")
        return normalized


class CollectionConfig(StrictSchemaModel):
    """Per-collection model and adapter-wide sort order."""

    sort: list[tuple[str, int]] = Field(default_factory=list)
    model: Model | None = None

    @field_validator("sort")
    @classmethod
    def validate_sort(cls, value: list[tuple[str, int]]) -> list[tuple[str, int]]:
        for field, direction in value:
            if direction not in (1, -1):
                raise ValueError(f"Sort direction for '{field}' must be 1 or -1")
        return value

    @field_validator("model", mode="before")
    @classmethod
    def parse_collection_model(cls, value: Any) -> Any:
        if value is None:
            return None
        return parse_model(value)


class AppConfig(StrictSchemaModel):
    """Central application configuration."""

    schema_version: str = Field(default=SCHEMA_VERSION, min_length=1)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    collections: dict[str, CollectionConfig] = Field(default_factory=dict)

    def collection_config(self, name: str) -> CollectionConfig:
        """Return the configured collection, or an unmodelled default."""
        return self.collections.get(name) or CollectionConfig()
