#!/usr/bin/env python3
"""Render a resolution map (resdot) as a leveled GraphViz graph.

With --xlabel-remainder, parents are annotated with the percentage of their
items that split off into clusters too small to be displayed.

Usage:
    python scripts/rcl_resmap.py --minres 200 < pfx.hi.200-500-1250.resdot > pfx.dot
    dot -Tpdf -Gsize=10,10\\! < pfx.dot > pfx.pdf
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rcl.config import get_resmap_settings, validate_label_mode  # noqa: E402
from rcl.errors import RclError  # noqa: E402
from rcl.logging_utils import setup_cli_logging  # noqa: E402
from rcl.resmap.dot import render_dot  # noqa: E402
from rcl.resmap.export import read_resmap  # noqa: E402
from rcl.resmap.layout import assign_rungs  # noqa: E402

logger = logging.getLogger("rcl_resmap")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Leveled GraphViz plot of a resolution map.")
    parser.add_argument("--input", type=Path, default=None, help="resdot file (default: stdin)")
    parser.add_argument("--output", type=Path, default=None, help="dot file (default: stdout)")
    parser.add_argument("--minres", type=int, default=0, help="Do not display nodes of size below this")
    parser.add_argument("--label", default="size", help="size|ival|leaf|none")
    parser.add_argument(
        "--xlabel-remainder",
        action="store_true",
        help="Show percentage of items peeling off in small fragments as a cluster splits.",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    label = validate_label_mode(args.label)
    settings = get_resmap_settings()
    if args.input is not None:
        with args.input.open("r", encoding="utf-8") as handle:
            resmap = read_resmap(handle)
    else:
        resmap = read_resmap(sys.stdin)

    graph = assign_rungs(resmap, minres=args.minres, settings=settings)
    text = render_dot(graph, label=label, xlabel_remainder=args.xlabel_remainder)
    if args.output is not None:
        args.output.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    setup_cli_logging(level=getattr(logging, str(args.log_level).upper(), logging.INFO))
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
