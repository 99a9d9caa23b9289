"""Page and document assembly for the reconstructed layout text."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..config import ExtractionConfig
from ..models import PageLayout
from .clustering import cluster_rows
from .spacing import render_row

log = logging.getLogger(__name__)

SEPARATOR_CHAR = "="
SEPARATOR_WIDTH = 80


def page_banner(page_number: int) -> str:
    """Separator block written before every page numbered above 1."""
    rule = SEPARATOR_CHAR * SEPARATOR_WIDTH
    return f"\n\n{rule}\nPage {page_number}\n{rule}\n\n"


def render_page(page: PageLayout, cfg: Optional[ExtractionConfig] = None) -> List[str]:
    """Return the page's lines (no newlines) top to bottom.

    A page without fragments renders to an empty list.
    """
    if cfg is None:
        cfg = ExtractionConfig()
    leftmost_x = page.leftmost_x
    if leftmost_x is None:
        return []

    rows = cluster_rows(page.fragments, cfg.y_tolerance, debug=cfg.enable_debug)
    return [
        render_row(row, leftmost_x, cfg.character_width_divisor)
        for row in rows
        if len(row)
    ]


def reconstruct_layout(
    pages: Sequence[PageLayout],
    cfg: Optional[ExtractionConfig] = None,
) -> str:
    """Render every page and join them with page banners.

    The banner uses the page number supplied by the collector verbatim,
    so non-contiguous numbering is reflected as-is.
    """
    if cfg is None:
        cfg = ExtractionConfig()

    chunks: List[str] = []
    for page in pages:
        if page.page_number > 1:
            chunks.append(page_banner(page.page_number))
        lines = render_page(page, cfg)
        if not lines:
            log.debug("page %d: no fragments to lay out", page.page_number)
        chunks.extend(line + "\n" for line in lines)
    return "".join(chunks)
