"""Reader for whitespace-delimited single-linkage join-order streams.

Two column layouts are accepted, told apart by field count:

- 12 fields: order_index repr_item_x repr_item_y cluster_id_x cluster_id_y
  similarity cluster_size_x cluster_size_y merged_size edge_count centrality
  quality
- 15 fields (``clm close --sl`` join order): i x y xid yid val xcid ycid xcsz
  ycsz xycsz nedge ctr lss nsg. The node labels x/y and the upstream lss
  column are ignored; nsg is the quality.

The first line is a header and is always discarded unread.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Dict, Iterable, Iterator, List, TextIO, Union

from rcl.errors import InvalidStream
from rcl.tree.models import MergeEvent

logger = logging.getLogger(__name__)

STREAM_COLUMNS = (
    "order_index", "repr_item_x", "repr_item_y", "cluster_id_x", "cluster_id_y",
    "similarity", "cluster_size_x", "cluster_size_y", "merged_size",
    "edge_count", "centrality", "quality",
)
CLM_COLUMNS = (
    "order_index", "x", "y", "repr_item_x", "repr_item_y", "similarity",
    "cluster_id_x", "cluster_id_y", "cluster_size_x", "cluster_size_y",
    "merged_size", "edge_count", "centrality", "lss", "quality",
)
LAYOUTS = {len(STREAM_COLUMNS): STREAM_COLUMNS, len(CLM_COLUMNS): CLM_COLUMNS}

INT_FIELDS = (
    "order_index", "cluster_id_x", "cluster_id_y", "cluster_size_x",
    "cluster_size_y", "merged_size", "edge_count",
)
FLOAT_FIELDS = ("similarity", "centrality", "quality")


_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
# Plain decimal notation only: no "1_0", "inf", "nan" or hex floats
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _to_int(raw: str, name: str, line: int) -> int:
    if _INTEGER.fullmatch(raw):
        return int(raw)
    # Some upstream writers print integral counts as "12.0"
    value = _to_float(raw, name, line)
    if not value.is_integer():
        raise InvalidStream(f"{name} must be integral; got '{raw}'", line)
    return int(value)


def _to_float(raw: str, name: str, line: int) -> float:
    if not _DECIMAL.fullmatch(raw):
        raise InvalidStream(f"non-numeric {name} '{raw}'", line)
    value = float(raw)
    if not math.isfinite(value):
        raise InvalidStream(f"{name} '{raw}' is out of range", line)
    return value


def parse_record(fields: List[str], line: int) -> MergeEvent:
    """Convert one split record into a MergeEvent, failing fast on bad fields."""
    columns = LAYOUTS.get(len(fields))
    if columns is None:
        raise InvalidStream(
            "expected %s fields, found %d"
            % (" or ".join(str(n) for n in sorted(LAYOUTS)), len(fields)),
            line,
        )
    raw: Dict[str, str] = dict(zip(columns, fields))
    values: Dict[str, Union[int, float, str]] = {
        "repr_item_x": raw["repr_item_x"],
        "repr_item_y": raw["repr_item_y"],
    }
    for name in INT_FIELDS:
        values[name] = _to_int(raw[name], name, line)
    for name in FLOAT_FIELDS:
        values[name] = _to_float(raw[name], name, line)

    if values["cluster_size_x"] < 1 or values["cluster_size_y"] < 1:
        raise InvalidStream("cluster sizes must be positive", line)
    if values["merged_size"] != values["cluster_size_x"] + values["cluster_size_y"]:
        raise InvalidStream(
            "merged size %d != %d + %d"
            % (values["merged_size"], values["cluster_size_x"], values["cluster_size_y"]),
            line,
        )
    return MergeEvent(line=line, **values)


def read_merge_events(lines: Iterable[str]) -> Iterator[MergeEvent]:
    """Stream MergeEvents from text lines; the first line is a header."""
    for line_no, text in enumerate(lines, start=1):
        if line_no == 1:
            continue
        fields = text.split()
        if not fields:
            continue
        yield parse_record(fields, line_no)


def open_merge_stream(handle: TextIO) -> Iterator[MergeEvent]:
    """Convenience wrapper for file objects (stdin included)."""
    logger.debug("Reading merge stream from %s", getattr(handle, "name", handle))
    return read_merge_events(handle)
