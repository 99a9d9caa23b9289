"""Per-page fragment extraction from the pdfplumber text layer.

Maps pdfplumber word dicts onto :class:`~pdf2txt.models.TextFragment`,
flipping ``y`` into bottom-up PDF user space so that larger ``y`` means
higher on the page.  Text is never modified here; empty and zero-size
words are kept.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import pdfplumber

from ..config import ExtractionConfig
from ..models import PageLayout, TextFragment

log = logging.getLogger(__name__)


def _build_extract_words_kwargs(cfg: ExtractionConfig) -> Dict[str, Any]:
    """Build ``pdfplumber.Page.extract_words`` keyword arguments."""
    kw: Dict[str, Any] = {
        "x_tolerance": cfg.collect_x_tolerance,
        "y_tolerance": cfg.collect_y_tolerance,
        "extra_attrs": ["fontname", "size"],
    }
    if cfg.collect_keep_blank_chars:
        kw["keep_blank_chars"] = True
    return kw


def _word_to_fragment(w: dict, page_h: float, has_eol: bool) -> TextFragment:
    """Convert a pdfplumber word dict → TextFragment."""
    x0 = float(w.get("x0", 0.0))
    x1 = float(w.get("x1", x0))
    top = float(w.get("top", 0.0))
    bottom = float(w.get("bottom", top))
    return TextFragment(
        text=w.get("text", ""),
        x=x0,
        y=page_h - bottom,
        width=x1 - x0,
        height=bottom - top,
        fontname=w.get("fontname", ""),
        has_eol=has_eol,
        direction=w.get("direction", "ltr"),
    )


def _line_end_flags(words: List[dict], y_tolerance: float) -> List[bool]:
    """Flag each word that closes a text line.

    pdfplumber emits words line by line; a line ends where the next
    word's ``top`` moves by more than *y_tolerance*, and at the last word.
    """
    flags = []
    for i, w in enumerate(words):
        if i == len(words) - 1:
            flags.append(True)
            continue
        dy = abs(float(words[i + 1].get("top", 0.0)) - float(w.get("top", 0.0)))
        flags.append(dy > y_tolerance)
    return flags


def extract_fragments_from_page(
    page: "pdfplumber.page.Page",
    page_number: int,
    cfg: Optional[ExtractionConfig] = None,
) -> PageLayout:
    """Extract fragments from an already-opened pdfplumber Page.

    Parameters
    ----------
    page : pdfplumber.page.Page
        An opened page object.
    page_number : int
        1-based page number stored on the returned layout.
    cfg : ExtractionConfig, optional
        Collection tunables.  Defaults are used when ``None``.

    Returns
    -------
    PageLayout
    """
    if cfg is None:
        cfg = ExtractionConfig()

    page_w = float(page.width)
    page_h = float(page.height)

    words = page.extract_words(**_build_extract_words_kwargs(cfg))
    eol = _line_end_flags(words, cfg.collect_y_tolerance)
    fragments = tuple(
        _word_to_fragment(w, page_h, has_eol) for w, has_eol in zip(words, eol)
    )

    if not fragments:
        log.warning(
            "page %d: zero fragments extracted (blank or image-only page)",
            page_number,
        )

    return PageLayout(
        page_number=page_number,
        fragments=fragments,
        width=page_w,
        height=page_h,
        scale=1.0,
    )
