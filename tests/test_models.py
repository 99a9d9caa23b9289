"""Tests for pdf2txt.models: fragments, pages, metadata and result variants."""

import dataclasses
import math

import pytest
from conftest import make_fragment, make_page

from pdf2txt.models import (
    FlatText,
    LayoutResult,
    PageLayout,
    PdfMetadata,
    RawData,
    Row,
    TextFragment,
)


class TestTextFragment:
    def test_frozen(self):
        f = make_fragment("a", 1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            f.x = 5  # type: ignore[misc]

    def test_empty_text_allowed(self):
        f = TextFragment(text="", x=0, y=0)
        assert f.text == ""
        assert f.width == 0.0

    def test_is_finite(self):
        assert make_fragment("a", 1, 2).is_finite()
        assert not make_fragment("a", math.nan, 2).is_finite()
        assert not make_fragment("a", 1, math.inf).is_finite()

    def test_dict_round_trip(self):
        f = make_fragment("Hello", 10.5, 700.25, width=30, has_eol=True)
        assert TextFragment.from_dict(f.to_dict()) == f

    def test_from_dict_defaults(self):
        f = TextFragment.from_dict({"text": "x", "x": 1, "y": 2})
        assert f.fontname == ""
        assert f.has_eol is False
        assert f.direction == "ltr"


class TestRow:
    def test_len(self):
        row = Row(anchor_y=10, fragments=(make_fragment("a", 0, 10), make_fragment("b", 5, 10)))
        assert len(row) == 2


class TestPageLayout:
    def test_leftmost_x_empty(self):
        assert make_page([]).leftmost_x is None

    def test_leftmost_x_whole_page(self):
        page = make_page([make_fragment("a", 30, 100), make_fragment("b", 12, 50)])
        assert page.leftmost_x == 12

    def test_to_dict_shape(self):
        page = make_page([make_fragment("a", 1, 2)], page_number=3)
        d = page.to_dict()
        assert d["page_number"] == 3
        assert d["viewport"] == {"width": 612.0, "height": 792.0, "scale": 1.0}
        assert d["fragments"][0]["text"] == "a"

    def test_from_dict(self):
        page = make_page([make_fragment("a", 1, 2)], page_number=2)
        assert PageLayout.from_dict(page.to_dict()) == page


class TestPdfMetadata:
    def test_from_info_maps_keys(self):
        md = PdfMetadata.from_info(
            {"Title": "Report", "Author": "", "ModDate": "D:20240101"}, pages=4
        )
        assert md.title == "Report"
        assert md.author is None
        assert md.modification_date == "D:20240101"
        assert md.creator is None
        assert md.pages == 4

    def test_dict_round_trip(self):
        md = PdfMetadata(title="T", producer="P", pages=2)
        assert PdfMetadata.from_dict(md.to_dict()) == md


class TestResults:
    def test_flat_text_to_dict(self):
        assert FlatText("abc").to_dict() == {"text": "abc"}

    def test_layout_result_to_dict_keys(self):
        result = LayoutResult(text="a", layout_text="a\n", pages=1)
        d = result.to_dict()
        assert set(d) == {
            "text",
            "layout_text",
            "metadata",
            "version",
            "pages",
            "page_layouts",
            "raw_data",
        }
        assert "stages" not in d

    def test_raw_data_to_dict(self):
        d = RawData(text_length=3, has_metadata=True, pdf_version="1.4").to_dict()
        assert d == {
            "text_length": 3,
            "has_metadata": True,
            "pdf_version": "1.4",
            "total_text_items": 0,
        }
