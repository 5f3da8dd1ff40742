"""
Tests for themes.watermark

Test Coverage:
- Opacity always clamped into [0.05, 0.15] when drawn
- Text defaults (minimum size, rotation, colour)
- Image watermarks fit 40% of the page and are never enlarged
- Anchors and presets
"""

from unittest.mock import MagicMock

import pytest
from PIL import Image
from reportlab.lib.utils import ImageReader

from booklet_toolkit.core.geometry import PageGeometry
from booklet_toolkit.core.models import WatermarkKind, WatermarkPosition, WatermarkSpec
from booklet_toolkit.themes.watermark import (
    PreparedWatermark,
    default_watermark_for_theme,
    draw_watermark,
    watermark_anchor,
)


@pytest.fixture
def geometry():
    return PageGeometry()


class TestDrawTextWatermark:
    @pytest.mark.parametrize("requested, expected", [(1.0, 0.15), (0.0, 0.05), (0.1, 0.1)])
    def test_draw_when_opacity_out_of_range_then_clamped(self, geometry, requested, expected):
        c = MagicMock()
        spec = WatermarkSpec(kind=WatermarkKind.TEXT, content="DENEME", opacity=requested)

        draw_watermark(c, PreparedWatermark(spec), geometry)

        c.setFillAlpha.assert_called_once_with(pytest.approx(expected))
        c.setStrokeAlpha.assert_called_once_with(pytest.approx(expected))

    def test_draw_when_defaults_then_min_size_rotation_and_grey(self, geometry):
        c = MagicMock()
        spec = WatermarkSpec(kind=WatermarkKind.TEXT, content="TASLAK", size=12)

        draw_watermark(c, PreparedWatermark(spec), geometry)

        c.setFont.assert_called_once_with("Helvetica-Bold", 40.0)
        c.rotate.assert_called_once_with(-30.0)
        c.setFillColorRGB.assert_called_once_with(0.8, 0.8, 0.8)
        c.translate.assert_called_once_with(297.5, 421.0)
        c.drawCentredString.assert_called_once()

    def test_draw_when_rotation_zero_then_kept(self, geometry):
        c = MagicMock()
        spec = WatermarkSpec(kind=WatermarkKind.TEXT, content="X", rotation_degrees=0)
        draw_watermark(c, PreparedWatermark(spec), geometry)
        c.rotate.assert_called_once_with(0)

    def test_draw_when_turkish_text_then_sanitised(self, geometry):
        c = MagicMock()
        spec = WatermarkSpec(kind=WatermarkKind.TEXT, content="SINAVIŞ")
        draw_watermark(c, PreparedWatermark(spec), geometry)
        assert c.drawCentredString.call_args.args[2] == "SINAVIS"

    def test_draw_when_kind_none_then_nothing_drawn(self, geometry):
        c = MagicMock()
        draw_watermark(c, PreparedWatermark(WatermarkSpec()), geometry)
        c.saveState.assert_not_called()


class TestDrawImageWatermark:
    def test_draw_when_small_image_then_never_enlarged(self, geometry):
        c = MagicMock()
        reader = ImageReader(Image.new("RGB", (100, 50), "white"))
        spec = WatermarkSpec(kind=WatermarkKind.IMAGE, content=b"x")

        draw_watermark(c, PreparedWatermark(spec, reader), geometry)

        kwargs = c.drawImage.call_args.kwargs
        assert kwargs["width"] == pytest.approx(100)
        assert kwargs["height"] == pytest.approx(50)
        c.rotate.assert_called_once_with(0.0)

    def test_draw_when_large_image_then_fit_to_forty_percent(self, geometry):
        c = MagicMock()
        reader = ImageReader(Image.new("RGB", (2000, 1000), "white"))
        spec = WatermarkSpec(kind=WatermarkKind.IMAGE, content=b"x", size=50)

        draw_watermark(c, PreparedWatermark(spec, reader), geometry)

        kwargs = c.drawImage.call_args.kwargs
        assert kwargs["width"] == pytest.approx(595.0 * 0.4 * 0.5)

    def test_draw_when_image_missing_then_skipped(self, geometry):
        c = MagicMock()
        spec = WatermarkSpec(kind=WatermarkKind.IMAGE, content=b"not an image")
        prepared = PreparedWatermark(spec, None)

        draw_watermark(c, prepared, geometry)

        assert not prepared.is_drawable
        c.drawImage.assert_not_called()


class TestAnchorsAndPresets:
    @pytest.mark.parametrize(
        "position, expected",
        [
            (WatermarkPosition.CENTER, (297.5, 421.0)),
            (WatermarkPosition.TOP_LEFT, (100.0, 742.0)),
            (WatermarkPosition.BOTTOM_RIGHT, (495.0, 100.0)),
        ],
    )
    def test_anchor_when_position_then_coordinates(self, position, expected):
        assert watermark_anchor(position, PageGeometry()) == pytest.approx(expected)

    def test_preset_when_known_theme_then_text_watermark(self):
        preset = default_watermark_for_theme("yaprak-test")
        assert preset.kind is WatermarkKind.TEXT
        assert preset.content == "YAPRAK TEST"

    def test_preset_when_unknown_theme_then_none_kind(self):
        assert default_watermark_for_theme("nope").kind is WatermarkKind.NONE
