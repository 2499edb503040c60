"""Document validation exports."""

from easycollection.validation.validator import (
    ValidationOutcome,
    runtime_kind,
    validate_against_model,
)

__all__ = ["ValidationOutcome", "runtime_kind", "validate_against_model"]
