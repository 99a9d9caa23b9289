"""Row clustering: group fragments into visual lines by vertical proximity.

Fragments are visited top-to-bottom (descending ``y``, then ascending
``x``).  Each fragment joins the first existing group whose *anchor* ``y``
lies strictly within ``y_tolerance`` of its own ``y``; otherwise it opens a
new group anchored at its ``y``.  Anchors are never recomputed, so a
fragment close to a row's lowest member but not to its anchor starts a
row of its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ..models import Row, TextFragment

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RowGroup:
    anchor_y: float
    members: Tuple[TextFragment, ...]

    def accepts(self, fragment: TextFragment, y_tolerance: float) -> bool:
        return abs(fragment.y - self.anchor_y) < y_tolerance


def reading_order(fragments: Iterable[TextFragment]) -> List[TextFragment]:
    """Top-to-bottom, left-to-right visiting order used by the clustering fold."""
    return sorted(fragments, key=lambda f: (-f.y, f.x))


def _assign(
    groups: Tuple[_RowGroup, ...],
    fragment: TextFragment,
    y_tolerance: float,
) -> Tuple[Tuple[_RowGroup, ...], int]:
    """One fold step: return the new groups and the index the fragment joined."""
    for idx, grp in enumerate(groups):
        if grp.accepts(fragment, y_tolerance):
            joined = _RowGroup(grp.anchor_y, grp.members + (fragment,))
            return groups[:idx] + (joined,) + groups[idx + 1 :], idx
    return groups + (_RowGroup(fragment.y, (fragment,)),), len(groups)


def _log_assignments(
    ordered: Sequence[TextFragment],
    assigned: Sequence[int],
    groups: Sequence[_RowGroup],
) -> None:
    for frag, idx in zip(ordered, assigned):
        log.debug(
            '"%s" y=%.2f x=%.2f grouped with %d items',
            frag.text,
            frag.y,
            frag.x,
            len(groups[idx].members),
        )


def cluster_rows(
    fragments: Iterable[TextFragment],
    y_tolerance: float,
    debug: bool = False,
) -> List[Row]:
    """Partition *fragments* into rows ordered top to bottom.

    Parameters
    ----------
    fragments : iterable of TextFragment
        All fragments of one page.
    y_tolerance : float
        Strict vertical tolerance against a group's anchor ``y``.
    debug : bool
        When set, log one record per fragment (processing order) on this
        module's logger at DEBUG level.  Never affects the result.

    Returns
    -------
    list[Row]
        Rows by descending anchor ``y``; fragments in each row by
        ascending ``x``.  Empty input yields an empty list.
    """
    ordered = reading_order(fragments)
    if not ordered:
        return []

    groups: Tuple[_RowGroup, ...] = ()
    assigned: List[int] = []
    for frag in ordered:
        groups, idx = _assign(groups, frag, y_tolerance)
        assigned.append(idx)

    if debug:
        _log_assignments(ordered, assigned, groups)

    rows = [
        Row(
            anchor_y=grp.anchor_y,
            fragments=tuple(sorted(grp.members, key=lambda f: f.x)),
        )
        for grp in sorted(groups, key=lambda g: -g.anchor_y)
    ]
    return rows
