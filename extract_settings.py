"""Extract motor-controller function settings from an exported settings file.

Usage:
  python extract_settings.py export.pdf
  python extract_settings.py pasted.txt --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from pdf_text import load_pages
from settings_confidence import confidence_level
from settings_models import ExtractionResult, PreviewRow
from settings_pipeline import DEFAULT_SUFFICIENCY_THRESHOLD, ExtractionConfig, extract_document
from settings_preview import build_preview

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_SETTINGS = 2

_MANUAL_ENTRY_SUGGESTIONS = [
    "Make sure the export contains function numbers (F.1, F.No. 2, ...) next to their values",
    "Look for a table with an F.No. column and a Counts or Value column",
    "Scanned pages have no text layer and cannot be read; export the settings again as text",
    "Enter the settings manually if the export format is not recognised",
]


def _print_row(row: PreviewRow, source: str, verbose: bool) -> None:
    flag = "" if row.in_range else "  (outside expected range)"
    print(f"  F.{row.function_number:<4} {row.name:<32} {row.value:>5}{flag}")
    if verbose:
        low, high = row.expected_range
        print(f"        Expected:  {low}-{high}  ({row.description or 'no description'})")
        print(f"        Source:    {source}")


def print_report(result: ExtractionResult, preview: list[PreviewRow], verbose: bool) -> None:
    print("=" * 64)
    print("RESULTS")
    print("=" * 64)

    if result.is_empty:
        print("No controller settings found in the document.\n")
        print("Suggestions:")
        for line in _MANUAL_ENTRY_SUGGESTIONS:
            print(f"  - {line}")
        print()
        return

    level = confidence_level(result.confidence)
    print(f"\nSettings found: {result.valid_count}  (pages: {result.page_count})")
    print(f"Confidence:     {result.confidence:.2f}  ({level})")
    print(f"Rejected:       {result.invalid_count}")
    print(f"Strategies:     {', '.join(result.strategies_used)}\n")

    for row in preview:
        _print_row(row, result.sources.get(row.function_number, "?"), verbose)

    if verbose and result.rejections:
        print("\nRejected candidates:\n")
        for message in result.rejections:
            print(f"  {message}")
    print()


def _as_json(result: ExtractionResult, preview: list[PreviewRow]) -> str:
    payload = asdict(result)
    payload["settings"] = {str(k): v for k, v in sorted(result.settings.items())}
    payload["sources"] = {str(k): v for k, v in sorted(result.sources.items())}
    payload["confidence_level"] = confidence_level(result.confidence)
    payload["preview"] = [asdict(row) for row in preview]
    return json.dumps(payload, indent=2)


def run(
    path: str,
    config: ExtractionConfig,
    as_json: bool = False,
    verbose: bool = False,
) -> int:
    file_path = Path(path)
    if not file_path.exists():
        print(f"Error: file not found: {file_path}", file=sys.stderr)
        return EXIT_ERROR

    result = extract_document(load_pages(file_path), config)
    preview = build_preview(result.settings)

    if as_json:
        print(_as_json(result, preview))
    else:
        print_report(result, preview, verbose)

    return EXIT_NO_SETTINGS if result.is_empty else EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract controller function settings from a PDF or text export.",
    )
    parser.add_argument("file", help="Path to the PDF or text export")
    parser.add_argument(
        "--threshold",
        type=int, default=DEFAULT_SUFFICIENCY_THRESHOLD, metavar="N",
        help="Stop trying lower-precision strategies once N settings are found "
             f"(default: {DEFAULT_SUFFICIENCY_THRESHOLD})",
    )
    parser.add_argument(
        "--workers",
        type=int, default=1, metavar="N",
        help="Extract up to N pages in parallel (default: 1)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a report",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show expected ranges, the strategy behind each value and rejected candidates",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log cascade decisions to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        config = ExtractionConfig(sufficiency_threshold=args.threshold, max_workers=args.workers)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    return run(args.file, config, as_json=args.json, verbose=args.verbose)


if __name__ == "__main__":
    sys.exit(main())
