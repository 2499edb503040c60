"""Recursive document validation against declarative models."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Mapping

from easycollection.schemas.enums import FieldKind
from easycollection.schemas.model_spec import Model


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one document.

    Truthy only when accepted. ``document`` is a normalized copy of the
    input (with insert-time defaults applied) and is ``None`` on rejection.
    """

    accepted: bool
    document: dict[str, Any] | None = None

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def accept(cls, document: dict[str, Any]) -> "ValidationOutcome":
        return cls(accepted=True, document=document)

    @classmethod
    def reject(cls) -> "ValidationOutcome":
        return cls(accepted=False)


def runtime_kind(value: Any) -> FieldKind:
    """Classify a value into the field kind it satisfies."""
    if isinstance(value, bool):
        return FieldKind.BOOLEAN
    if isinstance(value, (int, float)):
        return FieldKind.NUMBER
    if isinstance(value, str):
        return FieldKind.STRING
    if isinstance(value, Mapping):
        return FieldKind.OBJECT
    if isinstance(value, (list, tuple)):
        return FieldKind.ARRAY
    if value is None:
        return FieldKind.OTHER
    return FieldKind.OBJECT


def validate_against_model(
    model: Model,
    document: Mapping[str, Any],
    *,
    is_insert: bool,
) -> ValidationOutcome:
    """Validate ``document`` against ``model`` without mutating it."""
    normalized = _normalize(model, document, is_insert)
    if normalized is None:
        return ValidationOutcome.reject()
    return ValidationOutcome.accept(normalized)


def _normalize(
    model: Model,
    document: Mapping[str, Any],
    is_insert: bool,
) -> dict[str, Any] | None:
    # Closed schema: undeclared fields fail at every level.
    for field in document:
        if field not in model:
            return None

    normalized = dict(document)
    for name, spec in model.items():
        if name not in document:
            if is_insert and spec.required:
                return None
            if is_insert and spec.has_default:
                normalized[name] = copy.deepcopy(spec.default)
            continue

        value = document[name]
        if runtime_kind(value) != spec.type:
            return None
        if spec.type != FieldKind.OBJECT:
            continue
        if spec.class_tag is not None:
            if type(value).__name__ != spec.class_tag:
                return None
        elif spec.nested_model is not None:
            if not isinstance(value, Mapping):
                return None
            nested = _normalize(spec.nested_model, value, is_insert)
            if nested is None:
                return None
            normalized[name] = nested
    return normalized
