"""Extraction pipeline: collect → layout, with stage timing and error wrapping.

The stage flow is::

    collect → layout

:func:`build_result` is the core entry point over already-collected pages
and performs no file I/O.  :func:`extract_text_from_pdf` adds the collect
stage and surfaces every upstream failure as a single
:class:`ExtractionError` carrying the cause message.
"""

from __future__ import annotations

import dataclasses
import logging
import time
import traceback
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional, Sequence

from .config import ExtractionConfig
from .ingest import PdfSource, collect_document
from .layout import reconstruct_layout
from .models import (
    ExtractionResult,
    FlatText,
    FragmentValidationError,
    LayoutResult,
    PageLayout,
    PdfMetadata,
    RawData,
)

logger = logging.getLogger("pdf2txt.pipeline")

ERROR_PREFIX = "Failed to extract text from PDF"

# Canonical stage sequence.
STAGE_ORDER = ["collect", "layout"]


class ExtractionError(Exception):
    """Raised when a document cannot be turned into text."""


# ── Stage result ───────────────────────────────────────────────────────


@dataclass
class StageResult:
    """Outcome record for a single pipeline stage."""

    stage: str
    status: str = "pending"  # "success" | "failed"
    duration_ms: int = 0
    counts: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Dict[str, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize stage result to a JSON-compatible dict."""
        d: Dict[str, Any] = {
            "stage": self.stage,
            "status": self.status,
            "duration_ms": self.duration_ms,
        }
        if self.counts:
            d["counts"] = self.counts
        if self.error is not None:
            d["error"] = self.error
        return d


@contextmanager
def run_stage(stage: str) -> Generator[StageResult, None, None]:
    """Context manager that times a pipeline stage and records its outcome.

    Usage::

        with run_stage("layout") as sr:
            text = reconstruct_layout(pages, cfg)
            sr.counts["lines"] = text.count("\\n")

    Exceptions are recorded on the :class:`StageResult` and re-raised.
    """
    sr = StageResult(stage=stage)
    t0 = time.perf_counter()
    try:
        yield sr
        sr.status = "success"
    except Exception as exc:
        sr.status = "failed"
        sr.error = {
            "type": type(exc).__name__,
            "message": str(exc),
            "stack": traceback.format_exc(),
        }
        raise
    finally:
        sr.duration_ms = int((time.perf_counter() - t0) * 1000)
        logger.info("stage %s: %s in %d ms", stage, sr.status, sr.duration_ms)


# ── Input checks ───────────────────────────────────────────────────────


def validate_fragments(pages: Sequence[PageLayout]) -> None:
    """Reject fragments whose x or y is NaN or infinite.

    Row clustering and column rounding would otherwise propagate such
    values silently into wrong row assignments.
    """
    for page in pages:
        for idx, frag in enumerate(page.fragments):
            if not frag.is_finite():
                raise FragmentValidationError(
                    f"page {page.page_number} fragment {idx} ({frag.text!r}) "
                    f"has non-finite position x={frag.x} y={frag.y}"
                )


def flatten_text(pages: Sequence[PageLayout]) -> str:
    """Concatenate fragment text in parse order, newline after line ends."""
    parts = []
    for page in pages:
        for frag in page.fragments:
            parts.append(frag.text)
            if frag.has_eol:
                parts.append("\n")
    return "".join(parts)


# ── Entry points ───────────────────────────────────────────────────────


def build_result(
    pages: Sequence[PageLayout],
    cfg: Optional[ExtractionConfig] = None,
    metadata: Optional[PdfMetadata] = None,
    version: str = "unknown",
    has_metadata: Optional[bool] = None,
) -> ExtractionResult:
    """Turn collected pages into flat text or a full :class:`LayoutResult`.

    Parameters
    ----------
    pages : sequence of PageLayout
        Every page of the document, in order.
    cfg : ExtractionConfig, optional
        Defaults to ``ExtractionConfig()``.
    metadata : PdfMetadata, optional
        Passed through unmodified.
    version : str
        PDF version label, passed through.
    has_metadata : bool, optional
        Whether the source carried an info dict; defaults to
        ``metadata is not None``.

    Returns
    -------
    FlatText or LayoutResult
        :class:`FlatText` unless ``cfg.include_layout`` is set.

    Raises
    ------
    ConfigValidationError
        When *cfg* holds a non-positive or non-finite tolerance/divisor.
    FragmentValidationError
        When any fragment has a non-finite coordinate.
    """
    if cfg is None:
        cfg = ExtractionConfig()
    cfg.validate()
    validate_fragments(pages)

    text = flatten_text(pages)
    if not cfg.include_layout:
        return FlatText(text)

    with run_stage("layout") as sr:
        layout_text = reconstruct_layout(pages, cfg)
        sr.counts = {
            "pages": len(pages),
            "lines": layout_text.count("\n"),
        }

    if has_metadata is None:
        has_metadata = metadata is not None
    if metadata is None:
        metadata = PdfMetadata(pages=len(pages))

    total_items = sum(len(p.fragments) for p in pages)
    return LayoutResult(
        text=text,
        layout_text=layout_text,
        metadata=metadata,
        version=version,
        pages=len(pages),
        page_layouts=list(pages),
        raw_data=RawData(
            text_length=len(text),
            has_metadata=has_metadata,
            pdf_version=version,
            total_text_items=total_items,
        ),
        stages={"layout": sr},
    )


def extract_text_from_pdf(
    source: PdfSource,
    cfg: Optional[ExtractionConfig] = None,
) -> ExtractionResult:
    """Extract text (and optionally the reconstructed layout) from a PDF.

    This is the library-grade entry point: it returns structured Python
    objects and writes nothing.

    Parameters
    ----------
    source : str, Path or bytes
        Path to the PDF file or the raw PDF bytes.
    cfg : ExtractionConfig, optional
        Defaults to ``ExtractionConfig()``.

    Raises
    ------
    ConfigValidationError
        Before any work, when *cfg* is invalid.
    ExtractionError
        For any failure while reading or processing the document.
    """
    if cfg is None:
        cfg = ExtractionConfig()
    cfg.validate()

    try:
        with run_stage("collect") as sr_collect:
            doc = collect_document(source, cfg)
            sr_collect.counts = {
                "pages": doc.num_pages,
                "fragments": doc.total_fragments,
            }
        result = build_result(
            doc.pages,
            cfg,
            metadata=doc.metadata,
            version=doc.version,
            has_metadata=doc.has_metadata,
        )
    except Exception as exc:
        logger.error("%s: %s", ERROR_PREFIX, exc)
        raise ExtractionError(f"{ERROR_PREFIX}: {exc}") from exc

    if isinstance(result, LayoutResult):
        result.stages = {"collect": sr_collect, **result.stages}
    return result


def extract_text(source: PdfSource) -> str:
    """Convenience wrapper returning only the flat text."""
    result = extract_text_from_pdf(source, ExtractionConfig(include_layout=False))
    return result.text


def extract_layout_data(
    source: PdfSource,
    cfg: Optional[ExtractionConfig] = None,
) -> LayoutResult:
    """Convenience wrapper that always returns a :class:`LayoutResult`."""
    cfg = dataclasses.replace(cfg or ExtractionConfig(), include_layout=True)
    result = extract_text_from_pdf(source, cfg)
    if not isinstance(result, LayoutResult):
        raise ExtractionError(f"{ERROR_PREFIX}: layout was not produced")
    return result
