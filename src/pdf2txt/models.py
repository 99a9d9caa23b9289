from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


class FragmentValidationError(ValueError):
    """Raised when a fragment carries coordinates the layout math cannot use."""


@dataclass(frozen=True)
class TextFragment:
    """Smallest unit: one positioned run of text on a page.

    ``y`` grows upward (PDF user space), so larger ``y`` means higher on
    the page.
    """

    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    fontname: str = ""
    has_eol: bool = False
    direction: str = "ltr"

    def is_finite(self) -> bool:
        """True when both coordinates are usable numbers."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "fontname": self.fontname,
            "has_eol": self.has_eol,
            "direction": self.direction,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "TextFragment":
        """Deserialize from a dict produced by :meth:`to_dict`."""
        return cls(
            text=d.get("text", ""),
            x=float(d["x"]),
            y=float(d["y"]),
            width=float(d.get("width", 0.0)),
            height=float(d.get("height", 0.0)),
            fontname=d.get("fontname", ""),
            has_eol=bool(d.get("has_eol", False)),
            direction=d.get("direction", "ltr"),
        )


@dataclass(frozen=True)
class Row:
    """Fragments judged to lie on one visual line, ordered left to right."""

    anchor_y: float
    fragments: Tuple[TextFragment, ...] = ()

    def __len__(self) -> int:
        return len(self.fragments)


@dataclass(frozen=True)
class PageLayout:
    """One page's fragments plus viewport metadata."""

    page_number: int  # 1-based, as supplied by the collector
    fragments: Tuple[TextFragment, ...] = ()
    width: float = 0.0
    height: float = 0.0
    scale: float = 1.0

    @property
    def leftmost_x(self) -> Optional[float]:
        """Smallest x over every fragment on the page, ``None`` when empty."""
        if not self.fragments:
            return None
        return min(f.x for f in self.fragments)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "page_number": self.page_number,
            "viewport": {
                "width": self.width,
                "height": self.height,
                "scale": self.scale,
            },
            "fragments": [f.to_dict() for f in self.fragments],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "PageLayout":
        """Deserialize from a dict produced by :meth:`to_dict`."""
        viewport = d.get("viewport", {})
        return cls(
            page_number=int(d["page_number"]),
            fragments=tuple(TextFragment.from_dict(f) for f in d.get("fragments", [])),
            width=float(viewport.get("width", 0.0)),
            height=float(viewport.get("height", 0.0)),
            scale=float(viewport.get("scale", 1.0)),
        )


@dataclass
class PdfMetadata:
    """Document info dictionary, passed through uninterpreted."""

    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None
    creation_date: Optional[str] = None
    modification_date: Optional[str] = None
    pages: int = 0

    # PDF info-dict key → field name
    INFO_KEYS = {
        "Title": "title",
        "Author": "author",
        "Subject": "subject",
        "Creator": "creator",
        "Producer": "producer",
        "CreationDate": "creation_date",
        "ModDate": "modification_date",
    }

    @classmethod
    def from_info(cls, info: Dict[str, Any], pages: int) -> "PdfMetadata":
        """Build from a PDF info dict; missing or empty values become ``None``."""
        values: Dict[str, Optional[str]] = {}
        for key, name in cls.INFO_KEYS.items():
            raw = info.get(key)
            values[name] = str(raw) if raw else None
        return cls(pages=pages, **values)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "title": self.title,
            "author": self.author,
            "subject": self.subject,
            "creator": self.creator,
            "producer": self.producer,
            "creation_date": self.creation_date,
            "modification_date": self.modification_date,
            "pages": self.pages,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "PdfMetadata":
        """Deserialize from a dict produced by :meth:`to_dict`."""
        return cls(
            title=d.get("title"),
            author=d.get("author"),
            subject=d.get("subject"),
            creator=d.get("creator"),
            producer=d.get("producer"),
            creation_date=d.get("creation_date"),
            modification_date=d.get("modification_date"),
            pages=int(d.get("pages", 0)),
        )


@dataclass
class RawData:
    """Extraction counters reported alongside the layout."""

    text_length: int = 0
    has_metadata: bool = False
    pdf_version: str = "unknown"
    total_text_items: int = 0

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "text_length": self.text_length,
            "has_metadata": self.has_metadata,
            "pdf_version": self.pdf_version,
            "total_text_items": self.total_text_items,
        }


@dataclass(frozen=True)
class FlatText:
    """Result variant returned when layout reconstruction is not requested."""

    text: str = ""

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {"text": self.text}


@dataclass
class LayoutResult:
    """Result variant bundling flat text, reconstructed layout and page detail."""

    text: str = ""
    layout_text: str = ""
    metadata: PdfMetadata = field(default_factory=PdfMetadata)
    version: str = "unknown"
    pages: int = 0
    page_layouts: List[PageLayout] = field(default_factory=list)
    raw_data: RawData = field(default_factory=RawData)
    # Stage timing records from the pipeline (not serialized).
    stages: Dict[str, Any] = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "text": self.text,
            "layout_text": self.layout_text,
            "metadata": self.metadata.to_dict(),
            "version": self.version,
            "pages": self.pages,
            "page_layouts": [p.to_dict() for p in self.page_layouts],
            "raw_data": self.raw_data.to_dict(),
        }


ExtractionResult = Union[FlatText, LayoutResult]
