#!/usr/bin/env python3
"""Cut a single-linkage join order into nested clusterings at several resolutions.

For decreasing resolution sizes, descends each tree node as long as two
disjoint components of size >= resolution exist below it, writes the
clustering, then proceeds with the next (smaller) resolution.

Usage:
    python scripts/rcl_select.py pfx 50 100 200 < sl.join-order
    python scripts/rcl_select.py pfx 100 400 --input sl.join-order --resmap --table
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rcl.config import format_resolution, get_select_settings, parse_resolutions  # noqa: E402
from rcl.errors import RclError  # noqa: E402
from rcl.logging_utils import setup_cli_logging  # noqa: E402
from rcl.report import (  # noqa: E402
    granularity_summary,
    log_granularity,
    nesting_table,
    write_nesting_table,
)
from rcl.resmap.export import build_resolution_map, write_resmap  # noqa: E402
from rcl.tree.builder import build_forest  # noqa: E402
from rcl.tree.cutter import cut_resolutions  # noqa: E402
from rcl.tree.output import write_resolution_files  # noqa: E402
from rcl.tree.stream import open_merge_stream  # noqa: E402

logger = logging.getLogger("rcl_select")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Select nested clusterings from a single-linkage join order."
    )
    parser.add_argument("prefix", help="Prefix for output file names")
    parser.add_argument("resolutions", nargs="*", help="Resolution sizes, any order")
    parser.add_argument("--input", type=Path, default=None, help="Join-order file (default: stdin)")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for output files")
    parser.add_argument("--resmap", action="store_true", help="Also write <prefix>.hi.<R..>.resdot")
    parser.add_argument("--table", action="store_true", help="Also write the <prefix>.hi.txt nesting table")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument("--quiet", action="store_true", help="Only warnings and errors on stderr")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    # Resolutions are checked before any stream processing.
    resolutions = parse_resolutions(args.resolutions)
    settings = get_select_settings()
    output_dir = args.output_dir or settings.output_dir

    if args.input is not None:
        with args.input.open("r", encoding="utf-8") as handle:
            forest = build_forest(open_merge_stream(handle))
    else:
        forest = build_forest(open_merge_stream(sys.stdin))

    clusterings = cut_resolutions(forest, resolutions)
    summary = granularity_summary(clusterings, top=settings.summary_top, window=settings.shared_window)
    resmap = build_resolution_map(clusterings) if args.resmap else None
    table = nesting_table(clusterings) if args.table else None

    # Everything is computed; only now touch the file system.
    write_resolution_files(clusterings, args.prefix, output_dir)
    if resmap is not None:
        hyphenlist = "-".join(format_resolution(r) for r in sorted(resolutions))
        write_resmap(resmap, Path(output_dir) / f"{args.prefix}.hi.{hyphenlist}.resdot")
    if table is not None:
        write_nesting_table(table, Path(output_dir) / f"{args.prefix}.hi.txt")
    log_granularity(summary)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    setup_cli_logging(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        quiet=args.quiet,
        log_file=args.log_file,
    )
    try:
        return run(args)
    except RclError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    except OSError as exc:
        logger.error("I/O failure: %s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
