"""Serialization helpers for collected page layouts.

``serialize_pages`` converts a list of :class:`PageLayout` into a
JSON-friendly dict; ``deserialize_pages`` reads it back so a layout can be
reconstructed later (or with different tolerances) without re-reading
the PDF.

JSON layout
-----------
::

    {
      "version": 1,
      "pages": [ {PageLayout.to_dict()}, ... ]
    }

``deserialize_pages`` also accepts the ``LayoutResult.to_dict()`` shape
(``"page_layouts"`` key) and a bare list of page dicts.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Union

from ..models import PageLayout

FORMAT_VERSION = 1


def serialize_pages(pages: Sequence[PageLayout]) -> Dict[str, Any]:
    """Serialize page layouts to a JSON-friendly dict."""
    return {
        "version": FORMAT_VERSION,
        "pages": [p.to_dict() for p in pages],
    }


def deserialize_pages(data: Union[Dict[str, Any], List[Any]]) -> List[PageLayout]:
    """Rebuild page layouts from :func:`serialize_pages` or result JSON.

    Raises
    ------
    ValueError
        When *data* has none of the recognised shapes.
    """
    if isinstance(data, list):
        raw_pages = data
    elif "pages" in data and isinstance(data["pages"], list):
        raw_pages = data["pages"]
    elif "page_layouts" in data:
        raw_pages = data["page_layouts"]
    else:
        raise ValueError("No page layouts found (expected 'pages' or 'page_layouts')")
    return [PageLayout.from_dict(p) for p in raw_pages]
