"""Redaction of sensitive document values before they reach logs."""

from __future__ import annotations

import re
from typing import Any, Mapping

REDACTED = "[REDACTED]"
SENSITIVE_KEY_PATTERN = re.compile(
    r"(?i)(pass(word|wd)?|secret|token|api[-_]?key|authorization|credential)"
)
SENSITIVE_VALUE_PATTERNS = [
    re.compile(r"\bsk-[A-Za-z0-9:_-]{16,}\b"),
    re.compile(r"(?i)\b(bearer\s+)[A-Za-z0-9._:-]+\b"),
    re.compile(r"(mongodb(?:\+srv)?://[^:/@\s]+:)[^@\s]+(@)"),
]


def redact_text(value: str) -> str:
    """Redact token-like secrets and URI passwords from a text value."""
    redacted = SENSITIVE_VALUE_PATTERNS[0].sub(REDACTED, value)
    redacted = SENSITIVE_VALUE_PATTERNS[1].sub(r"\1" + REDACTED, redacted)
    return SENSITIVE_VALUE_PATTERNS[2].sub(r"\1" + REDACTED + r"\2", redacted)


def redact_document(value: Any) -> Any:
    """Recursively mask sensitive keys and secret-looking strings."""
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, Mapping):
        return {
            key: REDACTED
            if isinstance(key, str) and SENSITIVE_KEY_PATTERN.search(key)
            else redact_document(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_document(item) for item in value]
    return value
