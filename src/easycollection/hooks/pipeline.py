"""Composition of user hooks around model validation and store results."""

from __future__ import annotations

import asyncio
import copy
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Sequence, TypeVar, Union

from easycollection.errors import CollectionError, HookError, InvalidDocumentError
from easycollection.schemas.model_spec import Model
from easycollection.security.redaction import redact_document
from easycollection.validation.validator import ValidationOutcome, validate_against_model

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
MaybeAwaitable = Union[T, Awaitable[T]]

Validator = Callable[[dict[str, Any], bool, Any], MaybeAwaitable[Any]]
ReadFilter = Callable[[dict[str, Any]], MaybeAwaitable[Any]]
PreRemove = Callable[[Any], MaybeAwaitable[Any]]


@dataclass(frozen=True)
class HookConfig:
    """Hooks registered for one collection, fixed at construction."""

    insert_validator: Validator | None = None
    update_validator: Validator | None = None
    read_filter: ReadFilter | None = None
    pre_remove: tuple[PreRemove, ...] = ()

    def with_pre_remove(self, *callbacks: PreRemove) -> "HookConfig":
        """Return a copy with ``callbacks`` appended to the pre-remove chain."""
        return HookConfig(
            insert_validator=self.insert_validator,
            update_validator=self.update_validator,
            read_filter=self.read_filter,
            pre_remove=self.pre_remove + tuple(callbacks),
        )


async def _call_hook(hook_name: str, hook: Callable[..., Any], *args: Any) -> Any:
    try:
        result = hook(*args)
        if inspect.isawaitable(result):
            result = await result
    except CollectionError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise HookError(hook_name, exc) from exc
    return result


class HookPipeline:
    """Sequence custom validators, model validation, filters and pre-remove hooks."""

    def __init__(self, model: Model | None, hooks: HookConfig | None = None) -> None:
        self.model = model
        self.hooks = hooks or HookConfig()

    def validate_model(
        self, document: Mapping[str, Any], *, is_insert: bool
    ) -> ValidationOutcome:
        """Check a document against the model; no model accepts everything."""
        if self.model is None:
            return ValidationOutcome.accept(dict(document))
        return validate_against_model(self.model, document, is_insert=is_insert)

    async def apply_validator(
        self,
        document: Mapping[str, Any],
        *,
        is_insert: bool,
        identifier: Any = None,
    ) -> dict[str, Any]:
        """Return the document to persist or raise ``InvalidDocumentError``."""
        hook_name = "insert_validator" if is_insert else "update_validator"
        validator = self.hooks.insert_validator if is_insert else self.hooks.update_validator
        candidate: Any = document
        if validator is not None:
            # Validators may edit their argument; the caller's payload stays intact.
            result = await _call_hook(
                hook_name, validator, copy.deepcopy(dict(document)), is_insert, identifier
            )
            if isinstance(result, Mapping):
                candidate = result
            elif not result:
                self._log_rejection(hook_name, document)
                raise InvalidDocumentError(f"Document rejected by {hook_name}")
            elif result is not True:
                candidate = result

        if not isinstance(candidate, Mapping):
            self._log_rejection(hook_name, document)
            raise InvalidDocumentError(f"{hook_name} returned a non-document value")
        outcome = self.validate_model(candidate, is_insert=is_insert)
        if not outcome:
            self._log_rejection("model", candidate)
            raise InvalidDocumentError("Document does not match the collection model")
        assert outcome.document is not None
        return outcome.document

    async def apply_filter(self, document: dict[str, Any]) -> dict[str, Any]:
        """Run the read filter; a ``None`` return keeps the in-place result."""
        read_filter = self.hooks.read_filter
        if read_filter is None:
            return document
        result = await _call_hook("read_filter", read_filter, document)
        return document if result is None else result

    async def filter_all(self, documents: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
        """Filter documents concurrently; fail once all filters have settled."""
        if self.hooks.read_filter is None:
            return list(documents)
        results = await asyncio.gather(
            *(self.apply_filter(document) for document in documents),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def run_pre_remove(self, identifier: Any) -> None:
        """Run pre-remove callbacks one at a time in registration order."""
        for position, callback in enumerate(self.hooks.pre_remove):
            LOGGER.debug("Running pre-remove hook %d for %s", position, identifier)
            await _call_hook(f"pre_remove[{position}]", callback, identifier)

    @staticmethod
    def _log_rejection(stage: str, document: Any) -> None:
        LOGGER.debug("Validation rejected by %s: %s", stage, redact_document(document))
