"""Horizontal spacing synthesis: turn one row into one line of text.

Every fragment is mapped to an integer text column relative to the page's
leftmost ``x`` using a fixed character width, then padded with spaces to
reach that column.
"""

from __future__ import annotations

import math
from typing import List

from ..models import Row

# A following fragment that would start 1-2 columns after the cursor gets a
# single separating space instead of the full computed gap.
LOOKAHEAD_COLUMNS = 3


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def target_column(x: float, leftmost_x: float, character_width_divisor: float) -> int:
    """Text column for a fragment starting at *x* (halves round up)."""
    return _round_half_up((x - leftmost_x) / character_width_divisor)


def render_row(row: Row, leftmost_x: float, character_width_divisor: float) -> str:
    """Render *row* as a single line with trailing whitespace stripped."""
    parts: List[str] = []
    cursor = 0
    frags = row.fragments
    for i, frag in enumerate(frags):
        col = target_column(frag.x, leftmost_x, character_width_divisor)
        gap = max(0, col - cursor)
        if gap:
            parts.append(" " * gap)
        parts.append(frag.text)
        cursor = col + len(frag.text)

        if i < len(frags) - 1:
            next_col = target_column(frags[i + 1].x, leftmost_x, character_width_divisor)
            bridge = next_col - cursor
            if 0 < bridge < LOOKAHEAD_COLUMNS:
                parts.append(" ")
                cursor += 1

    return "".join(parts).rstrip()
