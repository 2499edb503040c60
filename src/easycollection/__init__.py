"""easycollection package entrypoints."""

from easycollection.cli import app
from easycollection.collection import Collection, create_collection
from easycollection.config import load_env_file
from easycollection.constants import PACKAGE_VERSION
from easycollection.errors import (
    BulkRemoveError,
    CollectionError,
    HookError,
    InvalidDocumentError,
    InvalidIdentifierError,
    NotFoundError,
)
from easycollection.hooks import HookConfig
from easycollection.schemas import ErrorKind, FieldKind, FieldSpec, parse_model
from easycollection.validation import ValidationOutcome, validate_against_model

__all__ = [
    "BulkRemoveError",
    "Collection",
    "CollectionError",
    "ErrorKind",
    "FieldKind",
    "FieldSpec",
    "HookConfig",
    "HookError",
    "InvalidDocumentError",
    "InvalidIdentifierError",
    "NotFoundError",
    "ValidationOutcome",
    "app",
    "create_collection",
    "main",
    "parse_model",
    "validate_against_model",
    "__version__",
]
__version__ = PACKAGE_VERSION


def main() -> None:
    """Launch the CLI."""
    load_env_file()
    app()
