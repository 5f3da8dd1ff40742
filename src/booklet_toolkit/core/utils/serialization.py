"""
Serialization Utilities

Turns the UI's JSON payload into model objects.

- Question images arrive as base64 data URLs and are decoded to bytes.
- Keys are camelCase in the payload and snake_case in the models.
- Validation runs first (see core.schemas.validator), so deserializers
  only have to deal with well-typed data.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Optional

from ..models.metadata import Metadata
from ..models.options import (
    GenerationOptions,
    LayoutOverrides,
    WatermarkKind,
    WatermarkPosition,
    WatermarkSpec,
)
from ..models.questions import Question
from ..schemas.validator import (
    ValidationError,
    validate_metadata,
    validate_options,
    validate_payload,
    validate_question,
)


def decode_data_url(value: str) -> bytes:
    """
    Decode a base64 data URL (or bare base64 string) to bytes.

    Args:
        value: ``data:image/png;base64,....`` or raw base64

    Returns:
        Decoded bytes

    Raises:
        ValueError: If the base64 body is malformed
    """
    body = value.split(",", 1)[1] if value.startswith("data:") and "," in value else value
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


def deserialize_question(data: dict[str, Any], *, validate: bool = True) -> Question:
    """
    Deserialize a Question from a UI payload object.

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_question(data, path=f"questions[{data.get('id', '?')}]" if isinstance(data, dict) else "questions[?]")

    try:
        image_data = decode_data_url(data["imageData"])
    except ValueError as e:
        raise ValidationError(str(e), path=f"questions[{data['id']}].imageData") from e

    return Question(
        id=str(data["id"]),
        image_data=image_data,
        correct_answer=data["correctAnswer"],
        order=int(data["order"]),
        actual_width=int(data.get("actualWidth", 0)),
        actual_height=int(data.get("actualHeight", 0)),
        source_document_id=data.get("sourceDocumentId"),
    )


def deserialize_metadata(data: dict[str, Any], *, validate: bool = True) -> Metadata:
    """Deserialize Metadata from a UI payload object."""
    if validate:
        validate_metadata(data)

    spacing = data.get("questionSpacing")
    return Metadata(
        test_name=data.get("testName"),
        course_name=data.get("courseName"),
        class_name=data.get("className"),
        teacher_name=data.get("teacherName"),
        question_spacing=int(spacing) if spacing is not None else None,
        custom_fields={str(k): str(v) for k, v in (data.get("customFields") or {}).items()},
    )


def _deserialize_watermark(data: Optional[dict[str, Any]]) -> Optional[WatermarkSpec]:
    if not data:
        return None
    try:
        kind = WatermarkKind(data.get("type", "none"))
        position = WatermarkPosition(data.get("position", "center"))
    except ValueError as e:
        raise ValidationError(str(e), path="options.watermark") from e

    content = data.get("content")
    if kind is WatermarkKind.IMAGE and isinstance(content, str):
        try:
            content = decode_data_url(content)
        except ValueError as e:
            raise ValidationError(str(e), path="options.watermark.content") from e

    color = data.get("color")
    return WatermarkSpec(
        kind=kind,
        content=content,
        opacity=data.get("opacity"),
        position=position,
        size=data.get("size"),
        rotation_degrees=data.get("rotation"),
        color=tuple(color) if color else None,
    )


def deserialize_options(data: Optional[dict[str, Any]], *, validate: bool = True) -> GenerationOptions:
    """
    Deserialize GenerationOptions from a UI payload object.

    Raises:
        ValidationError: If the watermark or layout section is malformed
    """
    data = data or {}
    if validate:
        validate_options(data)
    layout = data.get("customLayout")
    overrides = None
    if layout:
        try:
            overrides = LayoutOverrides(
                columns=layout.get("columns"),
                question_spacing=layout.get("questionSpacing"),
            )
        except ValueError as e:
            raise ValidationError(str(e), path="options.customLayout") from e

    return GenerationOptions(
        theme_id=str(data.get("theme") or data.get("themeId") or "classic"),
        watermark=_deserialize_watermark(data.get("watermark")),
        include_answer_key=data.get("includeAnswerKey"),
        custom_fields={str(k): str(v) for k, v in (data.get("customFields") or {}).items()},
        custom_layout=overrides,
    )


def deserialize_payload(data: Any) -> tuple[Metadata, list[Question], GenerationOptions]:
    """
    Deserialize a complete build payload.

    Returns:
        (metadata, questions, options)

    Raises:
        ValidationError: If any section is invalid
    """
    validate_payload(data)
    metadata = deserialize_metadata(data["metadata"], validate=False)
    questions = [deserialize_question(q, validate=False) for q in data["questions"]]
    options = deserialize_options(data.get("options"), validate=False)
    return metadata, questions, options
