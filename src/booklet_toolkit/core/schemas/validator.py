"""
Payload Validation Utilities

Validates the JSON payload the cropping UI hands to the engine before
it is turned into model objects.

Payload shape (camelCase, as produced by the UI):

    {
        "metadata": {"testName": ..., "questionSpacing": 10, ...},
        "questions": [
            {"id": ..., "imageData": "data:image/png;base64,...",
             "correctAnswer": "A", "order": 0,
             "actualWidth": 1200, "actualHeight": 600}
        ],
        "options": {"theme": "classic", "watermark": {...}, ...}
    }

Problems are collected rather than raised one at a time so that a
caller sees every broken question at once.
"""

from __future__ import annotations

from typing import Any

_ANSWER_LETTERS = {"A", "B", "C", "D", "E"}
_REQUIRED_QUESTION_KEYS = ("id", "imageData", "correctAnswer", "order")


class ValidationError(Exception):
    """Raised when payload data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []

    def __str__(self) -> str:
        base = super().__str__()
        if self.errors:
            return f"{base}: " + "; ".join(self.errors)
        return base


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_question(data: Any, path: str = "questions[?]") -> None:
    """
    Validate one question payload.

    Args:
        data: Parsed JSON object for a question
        path: Location used in error messages

    Raises:
        ValidationError: If any field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("Question must be an object", path=path)

    errors: list[str] = []
    for key in _REQUIRED_QUESTION_KEYS:
        if key not in data:
            errors.append(f"missing '{key}'")

    answer = data.get("correctAnswer")
    if answer is not None and str(answer).strip().upper() not in _ANSWER_LETTERS:
        errors.append(f"correctAnswer must be A-E, got {answer!r}")

    order = data.get("order")
    if order is not None and (not _is_int(order) or order < 0):
        errors.append(f"order must be a non-negative integer, got {order!r}")

    for key in ("actualWidth", "actualHeight"):
        value = data.get(key, 0)
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            errors.append(f"{key} must be a number, got {value!r}")

    image = data.get("imageData")
    if image is not None and not isinstance(image, str):
        errors.append("imageData must be a base64 string or data URL")

    if errors:
        raise ValidationError("Invalid question", path=path, errors=errors)


def validate_metadata(data: Any, path: str = "metadata") -> None:
    """
    Validate the metadata payload.

    Raises:
        ValidationError: If metadata is not an object or has bad types
    """
    if not isinstance(data, dict):
        raise ValidationError("Metadata must be an object", path=path)

    errors: list[str] = []
    for key in ("testName", "courseName", "className", "teacherName"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f"{key} must be a string")

    spacing = data.get("questionSpacing")
    if spacing is not None and (not isinstance(spacing, (int, float)) or isinstance(spacing, bool)):
        errors.append(f"questionSpacing must be a number, got {spacing!r}")

    custom = data.get("customFields")
    if custom is not None and not isinstance(custom, dict):
        errors.append("customFields must be an object")

    if errors:
        raise ValidationError("Invalid metadata", path=path, errors=errors)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_watermark(data: Any, errors: list[str]) -> None:
    if not isinstance(data, dict):
        errors.append("watermark must be an object")
        return
    for key in ("opacity", "size", "rotation"):
        value = data.get(key)
        if value is not None and not _is_number(value):
            errors.append(f"watermark.{key} must be a number, got {value!r}")
    content = data.get("content")
    if content is not None and not isinstance(content, str):
        errors.append("watermark.content must be a string")
    color = data.get("color")
    if color is not None and not (
        isinstance(color, (list, tuple)) and len(color) == 3 and all(_is_number(v) for v in color)
    ):
        errors.append(f"watermark.color must be a list of 3 numbers, got {color!r}")


def validate_options(data: Any, path: str = "options") -> None:
    """
    Validate the generation options payload.

    Raises:
        ValidationError: If options or one of its sections has the wrong shape
    """
    if not isinstance(data, dict):
        raise ValidationError("options must be an object", path=path)

    errors: list[str] = []
    watermark = data.get("watermark")
    if watermark is not None:
        _validate_watermark(watermark, errors)

    layout = data.get("customLayout")
    if layout is not None:
        if not isinstance(layout, dict):
            errors.append("customLayout must be an object")
        else:
            columns = layout.get("columns")
            if columns is not None and not _is_int(columns):
                errors.append(f"customLayout.columns must be an integer, got {columns!r}")
            spacing = layout.get("questionSpacing")
            if spacing is not None and not _is_number(spacing):
                errors.append(f"customLayout.questionSpacing must be a number, got {spacing!r}")

    custom = data.get("customFields")
    if custom is not None and not isinstance(custom, dict):
        errors.append("customFields must be an object")

    include = data.get("includeAnswerKey")
    if include is not None and not isinstance(include, bool):
        errors.append(f"includeAnswerKey must be true or false, got {include!r}")

    if errors:
        raise ValidationError("Invalid options", path=path, errors=errors)


def validate_payload(data: Any) -> None:
    """
    Validate a complete build payload.

    Raises:
        ValidationError: On the first malformed section, listing all
            problems found in it
    """
    if not isinstance(data, dict):
        raise ValidationError("Payload must be an object")

    validate_metadata(data.get("metadata"))

    questions = data.get("questions")
    if not isinstance(questions, list):
        raise ValidationError("questions must be a list", path="questions")
    for i, question in enumerate(questions):
        validate_question(question, path=f"questions[{i}]")

    validate_options(data.get("options", {}))
