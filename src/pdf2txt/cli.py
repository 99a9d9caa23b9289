"""Command-line entry point for ``pdf2txt``.

Usage
-----
    pdf2txt -i document.pdf
    pdf2txt -i document.pdf -o output.txt
    pdf2txt -i document.pdf -l -o layout.txt
    pdf2txt -i document.pdf -l -j -o layout.json
    pdf2txt --fragments pages.json -l --y-tolerance 3
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .config import ConfigValidationError, ExtractionConfig
from .export import deserialize_pages, format_layout_report
from .models import ExtractionResult, LayoutResult
from .pipeline import ExtractionError, build_result, extract_text_from_pdf

log = logging.getLogger("pdf2txt.cli")

_EPILOG = """\
Examples:
  pdf2txt -i document.pdf
  pdf2txt -i document.pdf -o output.txt
  pdf2txt -i document.pdf -l -o layout.txt
  pdf2txt -i document.pdf -l -j -o layout.json
"""


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="pdf2txt",
        description="PDF2TXT - Convert PDF files to text.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "-i",
        "--input",
        type=Path,
        default=None,
        help="Input PDF file path.",
    )
    p.add_argument(
        "--fragments",
        type=Path,
        default=None,
        help=(
            "Rebuild from a page-layout JSON file (serialize_pages or "
            "--json output) instead of reading a PDF."
        ),
    )
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: print to stdout).",
    )
    p.add_argument(
        "-l",
        "--layout",
        action="store_true",
        default=False,
        help="Include layout information and the reconstructed layout text.",
    )
    p.add_argument(
        "-j",
        "--json",
        action="store_true",
        default=False,
        help="Output the result as JSON.",
    )
    p.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=False,
        help="Log row-clustering diagnostics to stderr.",
    )
    p.add_argument(
        "--y-tolerance",
        type=float,
        default=2.0,
        help="Vertical distance under which fragments share a row (default 2.0).",
    )
    p.add_argument(
        "--character-width-divisor",
        type=float,
        default=4.0,
        help="Points per output column (default 4.0).",
    )
    p.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"pdf2txt v{__version__}",
    )
    return p.parse_args(argv)


def _render(result: ExtractionResult, as_json: bool) -> str:
    if as_json:
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if isinstance(result, LayoutResult):
        return format_layout_report(result)
    return result.text


def _load_fragments(path: Path, cfg: ExtractionConfig) -> ExtractionResult:
    if not path.is_file():
        raise ExtractionError(f"Fragments file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        pages = deserialize_pages(data)
    except (OSError, ValueError, KeyError, TypeError) as exc:
        raise ExtractionError(f"Cannot read fragments file: {exc}") from exc
    return build_result(pages, cfg)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if args.debug:
        # Only this package; pdfminer traces every parser step at DEBUG.
        logging.getLogger("pdf2txt").setLevel(logging.DEBUG)

    if args.input is None and args.fragments is None:
        print(
            "Error: Input file is required. Use --input or -i to specify a PDF file.",
            file=sys.stderr,
        )
        print("Use --help for more information.", file=sys.stderr)
        return 1

    try:
        cfg = ExtractionConfig(
            y_tolerance=args.y_tolerance,
            character_width_divisor=args.character_width_divisor,
            enable_debug=args.debug,
            include_layout=args.layout,
        )
    except ConfigValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        if args.fragments is not None:
            result = _load_fragments(args.fragments, cfg)
        else:
            if not args.input.exists():
                print(
                    f"Error: Input file '{args.input}' does not exist.",
                    file=sys.stderr,
                )
                return 1
            log.info("Converting PDF: %s", args.input)
            result = extract_text_from_pdf(args.input, cfg)
    except (ExtractionError, ValueError) as exc:
        print(f"Error processing PDF: {exc}", file=sys.stderr)
        return 1

    content = _render(result, args.json)

    if args.output is not None:
        try:
            args.output.write_text(content, encoding="utf-8")
        except OSError as exc:
            print(f"Error processing PDF: {exc}", file=sys.stderr)
            return 1
        print(f"Text saved to: {args.output}")
    else:
        print(content)
    return 0
