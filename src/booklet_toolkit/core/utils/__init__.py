"""Text sanitising and payload serialization helpers."""

from .text import generate_test_filename, sanitize_text
from .serialization import (
    decode_data_url,
    deserialize_metadata,
    deserialize_options,
    deserialize_payload,
    deserialize_question,
)

__all__ = [
    "generate_test_filename",
    "sanitize_text",
    "decode_data_url",
    "deserialize_metadata",
    "deserialize_options",
    "deserialize_payload",
    "deserialize_question",
]
