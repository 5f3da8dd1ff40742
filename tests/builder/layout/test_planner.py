"""
Tests for builder.layout.planner

Test Coverage:
- Original size: pixels at 300 DPI, never shrunk (scale_factor 1.0)
- None when the question does not fit (routing signal)
- Gutter anchoring per column, clamped inside the column
- Theme boost and answer area
- Fallback box for invalid pixel sizes
"""

import logging

import pytest

from booklet_toolkit.builder.layout import advance_column, natural_size, open_area, place_question
from booklet_toolkit.builder.layout.planner import FALLBACK_BOX_PT
from booklet_toolkit.themes import ThemeLayout


class TestNaturalSize:
    def test_natural_size_when_300_dpi_pixels_then_points(self, make_question):
        assert natural_size(make_question(width=1200, height=600)) == pytest.approx((288.0, 144.0))

    def test_natural_size_when_boosted_then_multiplied(self, make_question):
        assert natural_size(make_question(width=1200, height=600), 1.3) == pytest.approx((374.4, 187.2))


class TestPlaceQuestion:
    def test_place_when_fits_then_original_size_and_block_height(self, make_question):
        area = open_area(700, 2)

        placed = place_question(make_question(width=1000, height=600), area, spacing=5)

        assert placed.image_width == pytest.approx(240.0)
        assert placed.image_height == pytest.approx(144.0)
        assert placed.height == pytest.approx(15 + 144.0)
        assert placed.scale_factor == 1.0
        assert placed.top == pytest.approx(area.cursor_y)
        assert placed.question_number == 1

    def test_place_when_too_wide_then_none_never_shrunk(self, make_question):
        area = open_area(700, 2)
        # 1200px = 288pt, wider than a 282.8pt column
        assert place_question(make_question(width=1200, height=300), area, spacing=5) is None

    def test_place_when_too_tall_for_remaining_then_none(self, make_question):
        area = open_area(300, 1)
        assert place_question(make_question(width=600, height=1200), area, spacing=5) is None

    def test_place_when_spacing_eats_column_then_none(self, make_question):
        area = open_area(700, 2)
        assert place_question(make_question(width=10, height=10), area, spacing=200) is None

    def test_place_when_first_of_two_columns_then_leans_towards_gutter(self, make_question):
        area = open_area(700, 2)
        layout = ThemeLayout(inner_pad=50, image_offset_x=-20)

        placed = place_question(make_question(width=500, height=300), area, 5, layout)

        expected = area.column_x + area.column_width - placed.width - 50 - 20
        assert placed.x == pytest.approx(expected)

    def test_place_when_second_column_then_padded_from_left(self, make_question):
        area = advance_column(open_area(700, 2))
        layout = ThemeLayout(inner_pad=50, image_offset_x=-20)

        placed = place_question(make_question(width=500, height=300), area, 5, layout)

        assert placed.x == pytest.approx(area.column_x + 30)
        assert placed.column == 1

    def test_place_when_offset_pushes_outside_then_clamped_to_column(self, make_question):
        area = open_area(700, 1)
        layout = ThemeLayout(inner_pad=0, image_offset_x=-100)

        placed = place_question(make_question(width=600, height=300), area, 5, layout)

        assert placed.x == pytest.approx(area.column_x)

    def test_place_when_boosted_then_larger_but_unscaled(self, make_question):
        area = open_area(700, 1)
        placed = place_question(make_question(width=1000, height=500), area, 10, ThemeLayout(image_scale_boost=1.3))
        assert placed.image_width == pytest.approx(312.0)
        assert placed.image_scale_boost == 1.3
        assert placed.scale_factor == 1.0

    def test_place_when_answer_area_then_image_above_area(self, make_question):
        area = open_area(700, 1)
        layout = ThemeLayout(answer_area_height=50)

        placed = place_question(make_question(width=1000, height=500), area, 10, layout)

        assert placed.height == pytest.approx(15 + 120 + 50)
        assert placed.image_y == pytest.approx(placed.y + 50)
        assert placed.image_top == pytest.approx(placed.top - 15)

    def test_place_when_invalid_size_then_fallback_box_and_warning(self, make_question, caplog):
        area = open_area(700, 2)
        with caplog.at_level(logging.WARNING):
            placed = place_question(make_question(width=0, height=0), area, spacing=5)
        assert placed.image_width == pytest.approx(FALLBACK_BOX_PT)
        assert placed.image_height == pytest.approx(FALLBACK_BOX_PT)
        assert "invalid size" in caplog.text
