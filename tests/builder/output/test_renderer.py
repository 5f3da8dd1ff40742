"""
Tests for builder.output.renderer

Test Coverage:
- Stage order, answer key before footers
- Question pages never decrease along question order
- Undecodable question images become placeholders with a warning
- Oversized questions get a placeholder, no blank pages, loop ends
- Questions that only fit the first page are placed there
- Answer-key pages get the fainter watermark
- Watermark preparation skips bad artwork
"""

import asyncio
import base64
import io
import logging
from datetime import date

import pypdf
import pytest
from reportlab.lib.pagesizes import A4

from booklet_toolkit.builder.assets import BackgroundCache
from booklet_toolkit.builder.layout.models import PageKind
from booklet_toolkit.builder.output import BuildStage, PageRenderer, new_canvas, prepare_watermark
from booklet_toolkit.core.models import ThemedMetadata, WatermarkKind, WatermarkSpec
from booklet_toolkit.themes import PreparedWatermark, ThemeConfig, ThemePlugin

NO_WATERMARK = PreparedWatermark(spec=WatermarkSpec())


@pytest.fixture
def buffer():
    return io.BytesIO()


@pytest.fixture
def renderer(buffer, sample_metadata):
    plugin = ThemePlugin(config=ThemeConfig(id="plain", name="Plain"))
    themed = ThemedMetadata.from_metadata(sample_metadata, issued_on=date(2024, 5, 1))
    return PageRenderer(new_canvas(buffer, A4), plugin, themed, BackgroundCache(None), columns=2, spacing=5)


def _finish(renderer, questions, with_key=True):
    asyncio.run(renderer.render_questions(questions))
    if with_key:
        renderer.add_answer_key_pages(questions)
    renderer.add_footers_and_watermarks(NO_WATERMARK, NO_WATERMARK)
    renderer.serialize()


class TestStages:
    def test_render_when_complete_then_answer_key_before_footers(self, renderer, make_question):
        _finish(renderer, [make_question(i, width=800, height=400) for i in range(3)])

        history = renderer.stage_history
        assert history[0] is BuildStage.NEEDS_NEW_PAGE
        assert BuildStage.PLACING_QUESTIONS in history
        assert history[-5:] == [
            BuildStage.ALL_QUESTIONS_PLACED,
            BuildStage.ADDING_ANSWER_KEY,
            BuildStage.ADDING_FOOTERS,
            BuildStage.SERIALIZING,
            BuildStage.DONE,
        ]
        assert renderer.stage is BuildStage.DONE

    def test_render_when_key_added_then_total_includes_key_page(self, renderer, buffer, make_question):
        questions = [make_question(i, width=800, height=400) for i in range(3)]

        _finish(renderer, questions)

        kinds = [p.kind for p in renderer.layout_result().pages]
        assert kinds == [PageKind.QUESTIONS, PageKind.ANSWER_KEY]
        reader = pypdf.PdfReader(io.BytesIO(buffer.getvalue()))
        assert len(reader.pages) == 2


class TestQuestionFlow:
    def test_render_when_many_questions_then_pages_non_decreasing(self, renderer, make_question):
        questions = [make_question(i, width=800, height=400) for i in range(20)]

        asyncio.run(renderer.render_questions(list(reversed(questions))))

        result = renderer.layout_result()
        pages = [result.question_page_map[q.id] for q in questions]
        assert pages == sorted(pages)
        assert result.page_count >= 2
        assert result.total_placements == 20
        assert all(p.kind is PageKind.QUESTIONS for p in result.pages)

    def test_render_when_two_columns_then_second_column_used_before_new_page(self, renderer, make_question):
        questions = [make_question(i, width=800, height=400) for i in range(8)]

        asyncio.run(renderer.render_questions(questions))

        first_page = renderer.layout_result().pages[0]
        assert first_page.columns_used == 2
        columns = [p.column for p in first_page.placements]
        assert columns == sorted(columns)

    def test_render_when_image_undecodable_then_placeholder_and_warning(self, renderer, make_question, caplog):
        bad = make_question(0, width=800, height=400, data=b"not an image at all")

        with caplog.at_level(logging.WARNING):
            asyncio.run(renderer.render_questions([bad, make_question(1, width=800, height=400)]))

        result = renderer.layout_result()
        assert result.total_placements == 2
        assert any("q1" in w and "image" in w for w in result.warnings)
        assert result.skipped_question_ids == ()
        assert "could not be embedded" in caplog.text


class TestOversized:
    def test_render_when_question_larger_than_page_then_placeholder_and_loop_ends(self, renderer, make_question):
        questions = [
            make_question(0, width=800, height=400),
            make_question(1, width=4000, height=3000),
            make_question(2, width=800, height=400),
        ]

        asyncio.run(renderer.render_questions(questions))

        result = renderer.layout_result()
        assert result.skipped_question_ids == ("q2",)
        assert result.page_count == 1
        assert set(result.question_page_map) == {"q1", "q2", "q3"}
        assert any("does not fit on an empty page" in w for w in result.warnings)

    def test_render_when_every_question_oversized_then_no_blank_pages(self, renderer, make_question):
        questions = [make_question(i, width=5000, height=6000) for i in range(3)]

        asyncio.run(renderer.render_questions(questions))

        result = renderer.layout_result()
        assert len(result.skipped_question_ids) == 3
        assert result.page_count == 1


TALL_HEADER_TOP = 790.0


def _tall_header_renderer(buffer, metadata, columns):
    # First page content starts above the continuation header line
    plugin = ThemePlugin(config=ThemeConfig(id="tall", name="Tall"), render_header=lambda c, m, g: TALL_HEADER_TOP)
    themed = ThemedMetadata.from_metadata(metadata, issued_on=date(2024, 5, 1))
    return PageRenderer(new_canvas(buffer, A4), plugin, themed, BackgroundCache(None), columns=columns, spacing=5)


class TestFirstPageOnlyFit:
    """Questions that fit a fresh first-page column but not an empty continuation page."""

    def test_render_when_fits_first_page_column_then_placed_not_skipped(self, buffer, sample_metadata, make_question):
        renderer = _tall_header_renderer(buffer, sample_metadata, columns=2)
        # 2830px = 679.2pt: below the 700pt free on page one, above the 654.65pt of a continuation page
        tall = make_question(0, width=800, height=2830)

        asyncio.run(renderer.render_questions([tall]))

        result = renderer.layout_result()
        assert result.skipped_question_ids == ()
        assert result.total_placements == 1
        assert result.question_page_map == {"q1": 0}

    def test_render_when_first_column_used_then_moves_to_second_column(self, buffer, sample_metadata, make_question):
        renderer = _tall_header_renderer(buffer, sample_metadata, columns=2)
        questions = [make_question(i, width=800, height=2830) for i in range(2)]

        asyncio.run(renderer.render_questions(questions))

        result = renderer.layout_result()
        assert result.skipped_question_ids == ()
        assert result.page_count == 1
        assert [p.column for p in result.pages[0].placements] == [0, 1]

    def test_render_when_no_fresh_column_left_then_placeholder_and_loop_ends(
        self, buffer, sample_metadata, make_question
    ):
        renderer = _tall_header_renderer(buffer, sample_metadata, columns=1)
        questions = [make_question(i, width=800, height=2830) for i in range(2)]

        asyncio.run(renderer.render_questions(questions))

        result = renderer.layout_result()
        assert result.question_page_map == {"q1": 0, "q2": 1}
        assert result.skipped_question_ids == ("q2",)
        assert result.page_count == 2


class TestWatermarkPass:
    def test_footer_pass_when_answer_key_page_then_answer_key_watermark_used(
        self, buffer, sample_metadata, make_question
    ):
        # Arrange
        drawn = []
        plugin = ThemePlugin(
            config=ThemeConfig(id="recording", name="Recording"),
            render_watermark=lambda c, watermark, g: drawn.append(watermark),
        )
        themed = ThemedMetadata.from_metadata(sample_metadata, issued_on=date(2024, 5, 1))
        renderer = PageRenderer(new_canvas(buffer, A4), plugin, themed, BackgroundCache(None), columns=2, spacing=5)
        spec = WatermarkSpec(kind=WatermarkKind.TEXT, content="DENEME", opacity=0.15)
        question_wm = PreparedWatermark(spec=spec)
        key_wm = PreparedWatermark(spec=spec.attenuated())
        questions = [make_question(i, width=800, height=400) for i in range(12)]

        # Act
        asyncio.run(renderer.render_questions(questions))
        renderer.add_answer_key_pages(questions)
        renderer.add_footers_and_watermarks(question_wm, key_wm)

        # Assert
        kinds = [p.kind for p in renderer.layout_result().pages]
        assert len(drawn) == len(kinds)
        for kind, watermark in zip(kinds, drawn):
            expected = key_wm if kind is PageKind.ANSWER_KEY else question_wm
            assert watermark is expected
        assert kinds.count(PageKind.QUESTIONS) >= 2
        assert key_wm.spec.effective_opacity <= 0.1 < question_wm.spec.effective_opacity


class TestPrepareWatermark:
    def test_prepare_when_text_then_drawable(self):
        spec = WatermarkSpec(kind=WatermarkKind.TEXT, content="DENEME")
        assert asyncio.run(prepare_watermark(spec)).is_drawable

    def test_prepare_when_none_then_not_drawable(self):
        assert not asyncio.run(prepare_watermark(None)).is_drawable

    def test_prepare_when_image_bytes_then_decoded(self, png_bytes):
        prepared = asyncio.run(prepare_watermark(WatermarkSpec(kind=WatermarkKind.IMAGE, content=png_bytes)))
        assert prepared.image is not None
        assert prepared.is_drawable

    def test_prepare_when_image_data_url_then_decoded(self, png_bytes):
        url = "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
        prepared = asyncio.run(prepare_watermark(WatermarkSpec(kind=WatermarkKind.IMAGE, content=url)))
        assert prepared.is_drawable

    def test_prepare_when_image_undecodable_then_skipped(self):
        prepared = asyncio.run(prepare_watermark(WatermarkSpec(kind=WatermarkKind.IMAGE, content=b"garbage")))
        assert not prepared.is_drawable

    def test_prepare_when_data_url_malformed_then_skipped(self):
        spec = WatermarkSpec(kind=WatermarkKind.IMAGE, content="data:image/png;base64,@@@")
        assert not asyncio.run(prepare_watermark(spec)).is_drawable
