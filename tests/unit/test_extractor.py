#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for slide text extraction."""

import logging

import defusedxml.ElementTree as ET
import pytest
from utils import (
    bare_paragraph,
    empty_paragraph,
    field_paragraph,
    group,
    run_paragraph,
    shape,
    slide_xml,
    text_slide,
)

import pptx2slides.extractor as extractor_module
from pptx2slides.exceptions import SlideExtractionError
from pptx2slides.extractor import children, extract_fragments, extract_slide, paragraph_text
from pptx2slides.models import SlidePart, TextFragment


def _texts(fragments):
    return [fragment.text for fragment in fragments]


def _paragraph(xml: str):
    wrapped = f'<root xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main">{xml}</root>'
    return ET.fromstring(wrapped)[0]


@pytest.mark.unit
class TestParagraphText:
    """Tests for carrier precedence within one paragraph."""

    def test_runs_concatenated_without_separator(self):
        assert paragraph_text(_paragraph(run_paragraph("Hel", "lo ", "world"))) == "Hello world"

    def test_field_run(self):
        assert paragraph_text(_paragraph(field_paragraph("7"))) == "7"

    def test_bare_text(self):
        assert paragraph_text(_paragraph(bare_paragraph("Loose"))) == "Loose"

    def test_runs_take_precedence_over_fields(self):
        xml = (
            "<a:p><a:r><a:t>Slide </a:t></a:r>"
            '<a:fld id="{1}" type="slidenum"><a:t>3</a:t></a:fld></a:p>'
        )
        assert paragraph_text(_paragraph(xml)) == "Slide"

    def test_blank_runs_fall_back_to_field(self):
        xml = (
            "<a:p><a:r><a:t>   </a:t></a:r>"
            '<a:fld id="{1}" type="datetime1"><a:t>10/18/2026</a:t></a:fld></a:p>'
        )
        assert paragraph_text(_paragraph(xml)) == "10/18/2026"

    def test_text_is_trimmed(self):
        assert paragraph_text(_paragraph(run_paragraph("  padded  "))) == "padded"

    def test_blank_paragraph(self):
        assert paragraph_text(_paragraph(empty_paragraph())) is None
        assert paragraph_text(_paragraph(run_paragraph("   ", "\t"))) is None

    def test_run_without_text_node(self):
        assert paragraph_text(_paragraph('<a:p><a:r><a:rPr lang="en-US"/></a:r></a:p>')) is None


@pytest.mark.unit
class TestChildren:
    """Tests for the uniform sequence accessor."""

    def test_absent_node(self):
        assert children(None, "a:r") == []

    def test_single_and_many(self):
        single = _paragraph(run_paragraph("one"))
        many = _paragraph(run_paragraph("one", "two", "three"))
        assert len(children(single, "a:r")) == 1
        assert len(children(many, "a:r")) == 3

    def test_no_match(self):
        assert children(_paragraph(empty_paragraph()), "a:r") == []


@pytest.mark.unit
class TestExtractFragments:
    """Tests for whole-slide extraction."""

    def test_document_order(self):
        xml = slide_xml(
            shape(run_paragraph("Title"), shape_id=2),
            shape(run_paragraph("First"), run_paragraph("Second"), shape_id=3),
        )
        assert _texts(extract_fragments(xml)) == ["Title", "First", "Second"]

    def test_one_fragment_per_paragraph(self):
        xml = slide_xml(shape(run_paragraph("a", "b"), field_paragraph("c")))
        assert _texts(extract_fragments(xml)) == ["ab", "c"]

    def test_blank_paragraphs_dropped(self):
        xml = slide_xml(shape(empty_paragraph(), run_paragraph("Kept"), run_paragraph("  "), bare_paragraph("")))
        assert _texts(extract_fragments(xml)) == ["Kept"]

    def test_mixed_carriers(self):
        xml = slide_xml(shape(run_paragraph("Run"), field_paragraph("12"), bare_paragraph("Bare")))
        assert _texts(extract_fragments(xml)) == ["Run", "12", "Bare"]

    def test_grouped_shapes(self):
        xml = slide_xml(shape(run_paragraph("Outside")), group(shape(run_paragraph("Inside"), shape_id=11)))
        assert _texts(extract_fragments(xml)) == ["Outside", "Inside"]

    def test_shapes_without_text_body(self):
        pic = '<p:pic><p:nvPicPr><p:cNvPr id="4" name="Picture"/><p:cNvPicPr/><p:nvPr/></p:nvPicPr></p:pic>'
        xml = slide_xml(pic, shape(run_paragraph("Caption")))
        assert _texts(extract_fragments(xml)) == ["Caption"]

    def test_empty_slide(self):
        assert extract_fragments(slide_xml()) == []

    def test_accepts_bytes(self):
        assert _texts(extract_fragments(text_slide("Bytes").encode("utf-8"))) == ["Bytes"]

    def test_returns_text_fragments(self):
        fragments = extract_fragments(text_slide("Typed"))
        assert fragments == [TextFragment("Typed")]
        assert str(fragments[0]) == "Typed"

    def test_entities_decoded(self):
        assert _texts(extract_fragments(text_slide("R&D <2026>"))) == ["R&D <2026>"]

    def test_malformed_xml(self):
        with pytest.raises(SlideExtractionError) as exc_info:
            extract_fragments(b"<p:sld><unclosed", part_name="ppt/slides/slide4.xml")
        assert exc_info.value.part_name == "ppt/slides/slide4.xml"
        assert exc_info.value.fragments == []
        assert exc_info.value.original_error is not None

    def test_missing_shape_tree(self):
        xml = '<p:sld xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main"/>'
        with pytest.raises(SlideExtractionError, match="no shape tree"):
            extract_fragments(xml)

    def test_entity_expansion_refused(self):
        """defusedxml refuses entity declarations (billion laughs and friends)."""
        xml = '<!DOCTYPE p:sld [<!ENTITY lol "lol">]>' + text_slide("&lol;").split("\n", 1)[1]
        with pytest.raises(SlideExtractionError):
            extract_fragments(xml)

    def test_failure_mid_walk_keeps_collected(self, monkeypatch):
        calls = {"n": 0}
        original = extractor_module.paragraph_text

        def flaky(paragraph):
            calls["n"] += 1
            if calls["n"] == 3:
                raise RuntimeError("unexpected node")
            return original(paragraph)

        monkeypatch.setattr(extractor_module, "paragraph_text", flaky)

        with pytest.raises(SlideExtractionError) as exc_info:
            extract_fragments(text_slide("One", "Two", "Three", "Four"))
        assert _texts(exc_info.value.fragments) == ["One", "Two"]


@pytest.mark.unit
class TestExtractSlide:
    """Tests for best-effort extraction of a slide part."""

    def test_success(self):
        part = SlidePart(name="ppt/slides/slide1.xml", index=1, xml=text_slide("Hello").encode())
        result = extract_slide(part)

        assert result.ok
        assert result.error is None
        assert result.part_name == "ppt/slides/slide1.xml"
        assert _texts(result.fragments) == ["Hello"]

    def test_failure_is_absorbed(self, caplog):
        caplog.set_level(logging.WARNING, logger="pptx2slides")
        part = SlidePart(name="ppt/slides/slide2.xml", index=2, xml=b"<broken")

        result = extract_slide(part)

        assert not result.ok
        assert isinstance(result.error, SlideExtractionError)
        assert result.fragments == []
        assert "ppt/slides/slide2.xml" in caplog.text

    def test_partial_result_kept(self, monkeypatch):
        original = extractor_module.paragraph_text

        seen = []

        def fail_on_second(paragraph):
            seen.append(paragraph)
            if len(seen) == 2:
                raise ValueError("boom")
            return original(paragraph)

        monkeypatch.setattr(extractor_module, "paragraph_text", fail_on_second)
        part = SlidePart(name="ppt/slides/slide1.xml", index=1, xml=text_slide("Kept", "Lost").encode())

        result = extract_slide(part)

        assert not result.ok
        assert _texts(result.fragments) == ["Kept"]
