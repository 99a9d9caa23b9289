"""Layout reconstruction: rows, column spacing, and page assembly.

Public API
----------
- :func:`cluster_rows` — group a page's fragments into ordered rows
- :func:`render_row` — synthesize one line of spaced text from a row
- :func:`render_page` — all lines of one page
- :func:`reconstruct_layout` — multi-page text with page banners
"""

from .clustering import cluster_rows, reading_order
from .document import (
    SEPARATOR_CHAR,
    SEPARATOR_WIDTH,
    page_banner,
    reconstruct_layout,
    render_page,
)
from .spacing import LOOKAHEAD_COLUMNS, render_row, target_column

__all__ = [
    "LOOKAHEAD_COLUMNS",
    "SEPARATOR_CHAR",
    "SEPARATOR_WIDTH",
    "cluster_rows",
    "page_banner",
    "reading_order",
    "reconstruct_layout",
    "render_page",
    "render_row",
    "target_column",
]
