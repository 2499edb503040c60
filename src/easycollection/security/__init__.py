"""Redaction helpers."""

from easycollection.security.redaction import REDACTED, redact_document, redact_text

__all__ = ["REDACTED", "redact_document", "redact_text"]
