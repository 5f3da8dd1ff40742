import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import booklet_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from booklet_toolkit.core.models import Metadata, Question  # noqa: E402


def encode_image(width: int, height: int, fmt: str = "PNG", color: str = "white") -> bytes:
    """Encode a solid-colour image of the given size."""
    img = Image.new("RGB", (width, height), color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


# Common test fixtures
@pytest.fixture
def png_bytes() -> bytes:
    """Small PNG (64x32)."""
    return encode_image(64, 32)


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Small JPEG (64x32)."""
    return encode_image(64, 32, fmt="JPEG")


@pytest.fixture
def background_bytes() -> bytes:
    """Noisy PNG, well above the minimum asset size."""
    img = Image.effect_noise((120, 170), 64).convert("RGB")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_question(png_bytes):
    """Factory for questions; pixel sizes default to a 1200x600 crop."""

    def _make(order: int = 0, *, width: int = 1200, height: int = 600, answer: str = "A",
              qid: str | None = None, data: bytes | None = None) -> Question:
        return Question(
            id=qid or f"q{order + 1}",
            image_data=png_bytes if data is None else data,
            correct_answer=answer,
            order=order,
            actual_width=width,
            actual_height=height,
        )

    return _make


@pytest.fixture
def sample_metadata() -> Metadata:
    return Metadata(
        test_name="Deneme Sınavı 1",
        course_name="Matematik",
        class_name="9-A",
        teacher_name="Ayşe Yılmaz",
    )
