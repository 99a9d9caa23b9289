"""Positioned-text extraction and plain-text layout reconstruction for PDFs.

Frequently-used symbols are re-exported here for convenience.
For the lower-level pieces (row clustering, spacing, page-layout JSON)
import directly from the relevant submodule, e.g.::

    from pdf2txt.layout import cluster_rows, render_row
    from pdf2txt.export import serialize_pages
"""

__version__ = "1.0.0"

LIBRARY_INFO = {
    "name": "pdf2txt",
    "version": __version__,
    "description": "Extract text and layout information from PDF files",
    "license": "MIT",
}

# ── Core models & config ──────────────────────────────────────────────

from .config import ConfigValidationError, ExtractionConfig
from .ingest import IngestError, collect_document
from .layout import reconstruct_layout
from .models import (
    ExtractionResult,
    FlatText,
    FragmentValidationError,
    LayoutResult,
    PageLayout,
    PdfMetadata,
    RawData,
    Row,
    TextFragment,
)

# ── Pipeline ──────────────────────────────────────────────────────────

from .pipeline import (
    ExtractionError,
    StageResult,
    build_result,
    extract_layout_data,
    extract_text,
    extract_text_from_pdf,
)

__all__ = [
    "LIBRARY_INFO",
    "__version__",
    # Models & config
    "ConfigValidationError",
    "ExtractionConfig",
    "ExtractionResult",
    "FlatText",
    "FragmentValidationError",
    "LayoutResult",
    "PageLayout",
    "PdfMetadata",
    "RawData",
    "Row",
    "TextFragment",
    # Pipeline
    "ExtractionError",
    "StageResult",
    "build_result",
    "extract_layout_data",
    "extract_text",
    "extract_text_from_pdf",
    # Stages
    "IngestError",
    "collect_document",
    "reconstruct_layout",
]
