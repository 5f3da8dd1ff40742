"""Payload validation for the UI build contract."""

from .validator import (
    ValidationError,
    validate_metadata,
    validate_options,
    validate_payload,
    validate_question,
)

__all__ = [
    "ValidationError",
    "validate_metadata",
    "validate_options",
    "validate_payload",
    "validate_question",
]
