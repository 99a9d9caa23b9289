"""Human-readable layout report for the CLI.

Produces a plain-text summary of a :class:`LayoutResult`:

* PDF metadata (missing fields shown as ``N/A``)
* Extraction counters
* The reconstructed layout text
* Per-page viewport, fragment count and the first few fragments
"""

from __future__ import annotations

from typing import List, Optional

from ..models import LayoutResult, PageLayout, TextFragment

# Fragments listed per page before the "... and N more items" trailer.
SAMPLE_ITEMS = 5


def _na(value: Optional[str]) -> str:
    return value or "N/A"


def _format_viewport_dim(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _sample_line(frag: TextFragment) -> str:
    return (
        f'    "{frag.text}" - Position: [{frag.x:.2f}, {frag.y:.2f}], '
        f"Size: {frag.width:.2f}x{frag.height:.2f}, Font: {frag.fontname}"
    )


def _page_section(page: PageLayout) -> str:
    # One entry for the whole sample block, blank when the page is empty.
    samples = "\n".join(_sample_line(f) for f in page.fragments[:SAMPLE_ITEMS])
    extra = len(page.fragments) - SAMPLE_ITEMS
    lines = [
        "",
        f"Page {page.page_number}:",
        f"  Viewport: {_format_viewport_dim(page.width)} x "
        f"{_format_viewport_dim(page.height)}",
        f"  Text Items: {len(page.fragments)}",
        "  Sample Items:",
        samples,
        f"    ... and {extra} more items" if extra > 0 else "",
    ]
    return "\n".join(lines) + "\n"


def format_layout_report(result: LayoutResult) -> str:
    """Render *result* as the sectioned plain-text report."""
    md = result.metadata
    raw = result.raw_data
    header: List[str] = [
        "=== PDF METADATA ===",
        f"Title: {_na(md.title)}",
        f"Author: {_na(md.author)}",
        f"Subject: {_na(md.subject)}",
        f"Creator: {_na(md.creator)}",
        f"Producer: {_na(md.producer)}",
        f"Creation Date: {_na(md.creation_date)}",
        f"Modification Date: {_na(md.modification_date)}",
        f"Pages: {md.pages}",
        f"PDF Version: {result.version}",
        "",
        "=== LAYOUT INFORMATION ===",
        f"Total Text Items: {raw.total_text_items}",
        f"Text Length: {raw.text_length} characters",
        f"Has Metadata: {str(raw.has_metadata).lower()}",
        "",
        "=== RECONSTRUCTED LAYOUT TEXT ===",
        result.layout_text,
        "",
        "=== DETAILED PAGE LAYOUTS ===",
        "",
    ]
    pages = "".join(_page_section(p) for p in result.page_layouts)
    return "\n".join(header) + pages
