"""Ingest stage: PDF validation, per-page fragments, and metadata.

Public API
----------
- :func:`collect_document` — open + validate a PDF, return :class:`CollectedDocument`
- :func:`extract_fragments_from_page` — one pdfplumber page → :class:`PageLayout`
- :class:`CollectedDocument` — pages, metadata and PDF version
- :class:`IngestError` — raised on validation failures
"""

from .extract import extract_fragments_from_page
from .ingest import (
    CollectedDocument,
    IngestError,
    PdfSource,
    collect_document,
    sniff_pdf_version,
)

__all__ = [
    "CollectedDocument",
    "IngestError",
    "PdfSource",
    "collect_document",
    "extract_fragments_from_page",
    "sniff_pdf_version",
]
