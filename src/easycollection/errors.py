"""Error taxonomy surfaced by collection operations.

Every error raised by this package carries an ``ErrorKind`` so callers can
match on ``exc.kind`` (or the string ``exc.code``) exhaustively. Errors
raised by the storage driver are never wrapped and reach callers unchanged.
"""

from __future__ import annotations

from typing import Any

from easycollection.schemas.enums import ErrorKind


class CollectionError(Exception):
    """Base error for collection operations."""

    kind: ErrorKind = ErrorKind.INVALID_DOCUMENT

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.details = details

    @property
    def code(self) -> str:
        """Return the machine-checkable error code."""
        return self.kind.value


class InvalidDocumentError(CollectionError):
    """Raised when a custom validator or the model rejects a document."""

    kind = ErrorKind.INVALID_DOCUMENT


class NotFoundError(CollectionError):
    """Raised when an operation targets a document that does not exist."""

    kind = ErrorKind.NOT_FOUND


class InvalidIdentifierError(NotFoundError):
    """Raised when an identifier cannot be normalized to a store key."""

    kind = ErrorKind.INVALID_IDENTIFIER


class HookError(CollectionError):
    """Raised when a user hook raises instead of returning."""

    kind = ErrorKind.HOOK_FAILED

    def __init__(self, hook: str, cause: BaseException) -> None:
        super().__init__(f"{hook} hook failed: {cause}", hook=hook)
        self.hook = hook


class BulkRemoveError(CollectionError):
    """Raised when at least one removal of a bulk remove failed.

    Removals that succeeded are not rolled back; they are reported in
    ``removed`` next to the ``failures`` as ``(identifier, exception)`` pairs.
    """

    kind = ErrorKind.BULK_REMOVE_FAILED

    def __init__(
        self,
        removed: list[dict[str, Any]],
        failures: list[tuple[Any, BaseException]],
    ) -> None:
        super().__init__(
            f"{len(failures)} of {len(removed) + len(failures)} removal(s) failed",
            removed=len(removed),
            failed=len(failures),
        )
        self.removed = removed
        self.failures = failures
