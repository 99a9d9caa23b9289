"""Ingest stage: PDF source validation, page fragments, and metadata.

Centralises PDF opening so that the pipeline and CLI never call
``pdfplumber.open()`` directly.

Public API
----------
- :func:`collect_document` — open + validate a PDF, return a
  :class:`CollectedDocument` with one :class:`PageLayout` per page
- :class:`CollectedDocument` — pages, metadata and version
- :class:`IngestError` — raised on validation or open failures
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pdfplumber

from ..config import ExtractionConfig
from ..models import PageLayout, PdfMetadata
from .extract import extract_fragments_from_page

log = logging.getLogger(__name__)

PdfSource = Union[str, Path, bytes]

_RE_VERSION = re.compile(rb"%PDF-(\d+\.\d+)")
# The header must appear within the first 1024 bytes.
_HEADER_WINDOW = 1024


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------


@dataclass
class CollectedDocument:
    """Everything the collector hands to the layout stage."""

    pages: List[PageLayout] = field(default_factory=list)
    metadata: PdfMetadata = field(default_factory=PdfMetadata)
    version: str = "unknown"
    has_metadata: bool = False

    @property
    def num_pages(self) -> int:
        return len(self.pages)

    @property
    def total_fragments(self) -> int:
        return sum(len(p.fragments) for p in self.pages)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


class IngestError(Exception):
    """Raised when a PDF cannot be ingested."""


def _validate_pdf_path(pdf_path: Path) -> None:
    """Raise :class:`IngestError` for missing / non-file / empty paths."""
    if not pdf_path.exists():
        raise IngestError(f"File not found: {pdf_path}")
    if not pdf_path.is_file():
        raise IngestError(f"Not a file: {pdf_path}")
    if pdf_path.stat().st_size == 0:
        raise IngestError(f"Empty file: {pdf_path}")


def _read_header(source: PdfSource) -> bytes:
    if isinstance(source, bytes):
        return source[:_HEADER_WINDOW]
    with open(source, "rb") as fh:
        return fh.read(_HEADER_WINDOW)


def sniff_pdf_version(header: bytes) -> str:
    """Return the ``x.y`` version from a ``%PDF-x.y`` header, else ``"unknown"``."""
    m = _RE_VERSION.search(header)
    if not m:
        return "unknown"
    return m.group(1).decode("ascii")


def _coerce_info(raw_meta: Dict[Any, Any]) -> Dict[str, str]:
    """Coerce a PDF info dict to a simple ``str → str`` dict."""
    info: Dict[str, str] = {}
    for k, v in raw_meta.items():
        if isinstance(v, bytes):
            v = v.decode("utf-8", errors="replace")
        info[str(k)] = str(v) if v is not None else ""
    return info


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def collect_document(
    source: PdfSource,
    cfg: Optional[ExtractionConfig] = None,
) -> CollectedDocument:
    """Open a PDF and collect every page's fragments plus document metadata.

    Parameters
    ----------
    source : str, Path or bytes
        Path to the PDF file, or the raw PDF bytes.
    cfg : ExtractionConfig, optional
        Collection tunables.  Defaults are used when ``None``.

    Returns
    -------
    CollectedDocument
        The PDF handle is **closed** before returning.

    Raises
    ------
    IngestError
        When the source is missing, empty, encrypted, or cannot be opened.
    """
    if cfg is None:
        cfg = ExtractionConfig()

    if isinstance(source, bytes):
        if not source:
            raise IngestError("Empty PDF buffer")
        label = f"<{len(source)} bytes>"
        opener: Any = io.BytesIO(source)
    else:
        pdf_path = Path(source)
        _validate_pdf_path(pdf_path)
        label = pdf_path.name
        opener = pdf_path
        source = pdf_path

    try:
        version = sniff_pdf_version(_read_header(source))
        with pdfplumber.open(opener) as pdf:
            # pdfminer sets is_extractable = False on documents whose
            # permissions forbid text extraction.
            if hasattr(pdf, "doc") and hasattr(pdf.doc, "is_extractable"):
                if not pdf.doc.is_extractable:
                    raise IngestError(
                        f"PDF is password-protected or encrypted "
                        f"(text extraction not permitted): {label}"
                    )

            pages = [
                extract_fragments_from_page(pg, i + 1, cfg)
                for i, pg in enumerate(pdf.pages)
            ]
            info = _coerce_info(pdf.metadata or {})

    except IngestError:
        raise
    except Exception as exc:
        raise IngestError(f"Cannot open PDF: {exc}") from exc

    doc = CollectedDocument(
        pages=pages,
        metadata=PdfMetadata.from_info(info, pages=len(pages)),
        version=version,
        has_metadata=bool(info),
    )
    log.info(
        "Collected %s: %d pages, %d fragments, PDF %s",
        label,
        doc.num_pages,
        doc.total_fragments,
        version,
    )
    return doc
