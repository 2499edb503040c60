"""Redaction policy tests."""

from __future__ import annotations

from easycollection.security.redaction import REDACTED, redact_document, redact_text


def test_redact_text_masks_tokens_and_uri_passwords() -> None:
    """Token-like values and URI credentials are masked in text."""
    text = "Authorization: Bearer abc.def.ghi uri=mongodb://admin:hunter2@db:27017"
    redacted = redact_text(text)
    assert "abc.def.ghi" not in redacted
    assert "hunter2" not in redacted
    assert "mongodb://admin:[REDACTED]@db:27017" in redacted


def test_redact_document_masks_sensitive_keys() -> None:
    """Sensitive keys are masked at any depth; other values are kept."""
    document = {
        "name": "admin",
        "password": "ñor",
        "profile": {"api_key": "k", "tags": ["a", "sk-ABCDEFGHIJKLMNOPQRST"]},
        "age": 10,
    }
    redacted = redact_document(document)
    assert redacted["name"] == "admin"
    assert redacted["password"] == REDACTED
    assert redacted["profile"]["api_key"] == REDACTED
    assert redacted["profile"]["tags"] == ["a", REDACTED]
    assert redacted["age"] == 10
    assert document["password"] == "ñor"
