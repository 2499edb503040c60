"""Schema contract exports."""

from easycollection.schemas.enums import (
    ErrorKind,
    FieldKind,
    StorageBackend,
    normalize_field_kind,
    normalize_storage_backend,
)
from easycollection.schemas.model_spec import FieldSpec, Model, dump_model, parse_model

__all__ = [
    "ErrorKind",
    "FieldKind",
    "FieldSpec",
    "Model",
    "StorageBackend",
    "dump_model",
    "normalize_field_kind",
    "normalize_storage_backend",
    "parse_model",
]
