"""Merge spreadsheet files and folders into one MergedData workbook.

Usage:
    python scripts/merge_folder.py ./reports --keyword sales --output q1_sales
    python scripts/merge_folder.py a.xlsx b.csv --no-source-column --output-dir out/
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from sheetmerge.core.config import AppSettings
from sheetmerge.core.exceptions import SheetMergeError
from sheetmerge.core.logging import configure_logging
from sheetmerge.ingest.filtering import format_size
from sheetmerge.ingest.scanner import collect
from sheetmerge.models.file_entry import FileStatus
from sheetmerge.session import MergeSession


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Merge spreadsheet files into one workbook")
    parser.add_argument("paths", nargs="+", help="Spreadsheet files or folders to scan recursively")
    parser.add_argument("--keyword", default="", help="Only merge files whose name contains this")
    parser.add_argument("--sheet-index", type=non_negative_int, default=None, help="Zero-based sheet to read from each file")
    parser.add_argument("--output", default=None, help="Output file name (.xlsx is appended)")
    parser.add_argument("--output-dir", default=None, help="Directory for the merged workbook")
    parser.add_argument("--source-column", default=None, help="Name of the source path column")
    parser.add_argument("--no-source-column", action="store_true", help="Do not add the source path column")
    parser.add_argument("--suggest", action="store_true", help="Print a suggested unified header list")
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")
    return parser


def run(argv: Sequence[str] | None = None, session: MergeSession | None = None) -> int:
    args = build_parser().parse_args(argv)
    if session is None:
        session = MergeSession(settings=AppSettings())
    settings = session.settings
    configure_logging(args.log_level or settings.log_level)

    overrides: dict[str, Any] = {
        "filter_keyword": args.keyword,
        "add_source_column": not args.no_source_column,
        "use_smart_mapping": args.suggest,
    }
    if args.sheet_index is not None:
        overrides["sheet_index"] = args.sheet_index
    if args.output:
        overrides["output_file_name"] = args.output
    if args.source_column:
        overrides["source_column_name"] = args.source_column
    config = session.default_configuration(**overrides)

    session.add_files(collect(args.paths), config.sheet_index)

    visible = session.visible_entries(config.filter_keyword)
    print(f"Files: {len(visible)} / {len(session.entries())}")
    for entry in visible:
        line = f"  [{entry.status}] {entry.path} ({format_size(entry.size_bytes)})"
        if entry.status == FileStatus.ERROR:
            line += f": {entry.error_message}"
        print(line)

    if args.suggest:
        suggestion = session.suggest_headers(config)
        print(f"Suggested headers ({suggestion.source}): {', '.join(suggestion.headers)}")

    try:
        target = session.merge_to_disk(config, args.output_dir)
    except SheetMergeError as exc:
        print(f"Merge failed: {exc}", file=sys.stderr)
        return 1
    print(f"Saved {target}")
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
