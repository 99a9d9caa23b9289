"""Shared test fixtures for pdf2txt."""

from __future__ import annotations

import pytest

from pdf2txt.config import ExtractionConfig
from pdf2txt.models import PageLayout, TextFragment

# ── Helpers ────────────────────────────────────────────────────────────


def make_fragment(
    text: str,
    x: float,
    y: float,
    width: float = 0.0,
    height: float = 10.0,
    fontname: str = "Helvetica",
    has_eol: bool = False,
) -> TextFragment:
    """Create a TextFragment with sane defaults."""
    return TextFragment(
        text=text,
        x=x,
        y=y,
        width=width,
        height=height,
        fontname=fontname,
        has_eol=has_eol,
    )


def make_page(
    fragments: list[TextFragment],
    page_number: int = 1,
    width: float = 612.0,
    height: float = 792.0,
) -> PageLayout:
    """Wrap fragments in a letter-size PageLayout."""
    return PageLayout(
        page_number=page_number,
        fragments=tuple(fragments),
        width=width,
        height=height,
    )


def make_word(
    text: str,
    x0: float,
    top: float,
    x1: float | None = None,
    bottom: float | None = None,
    fontname: str = "Helvetica",
) -> dict:
    """Build a pdfplumber-style word dict (top-down coordinates)."""
    return {
        "text": text,
        "x0": x0,
        "x1": x0 + 5.0 * len(text) if x1 is None else x1,
        "top": top,
        "bottom": top + 10.0 if bottom is None else bottom,
        "fontname": fontname,
        "size": 10.0,
        "upright": True,
        "direction": "ltr",
    }


# ── Fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def default_cfg() -> ExtractionConfig:
    """Return a default ExtractionConfig."""
    return ExtractionConfig()


@pytest.fixture
def layout_cfg() -> ExtractionConfig:
    """Return a config that requests the reconstructed layout."""
    return ExtractionConfig(include_layout=True)


@pytest.fixture
def table_page() -> PageLayout:
    """A two-row, two-column table.

    Layout (x, y)::

        Name (0, 100)    Age (40, 100)
        Alice (0, 80)    30 (40, 80)
    """
    return make_page(
        [
            make_fragment("Name", 0, 100),
            make_fragment("Age", 40, 100, has_eol=True),
            make_fragment("Alice", 0, 80),
            make_fragment("30", 40, 80, has_eol=True),
        ]
    )
