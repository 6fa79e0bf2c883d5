"""Builders for synthetic merge streams and brute-force tree checks."""
from __future__ import annotations

from typing import Iterable, List, Sequence

from rcl.tree.models import Node

HEADER = "i x y xid yid val xcid ycid xcsz ycsz xycsz nedge ctr lss nsg"


def merge(
    id_x: int,
    id_y: int,
    size_x: int,
    size_y: int,
    item_x: str = "x",
    item_y: str = "y",
    similarity: float = 1.0,
    quality: float = 0.0,
    merged: int = None,
) -> List[str]:
    """Fields of one 12-column record; order_index is filled in by stream_lines."""
    merged = size_x + size_y if merged is None else merged
    return [
        item_x, item_y, str(id_x), str(id_y), str(similarity),
        str(size_x), str(size_y), str(merged), "1", "0.5", str(quality),
    ]


def stream_lines(records: Iterable[Sequence[str]], header: str = HEADER) -> List[str]:
    lines = [header + "\n"]
    for i, fields in enumerate(records):
        lines.append("\t".join([str(i), *fields]) + "\n")
    return lines


def brute_lss(node: Node) -> int:
    """Largest min(|left|, |right|) over every split in the subtree."""
    if node.is_leaf:
        return 0
    return max(
        min(node.left.size, node.right.size),
        brute_lss(node.left),
        brute_lss(node.right),
    )


def internal_nodes(root: Node) -> List[Node]:
    out, stack = [], [root]
    while stack:
        node = stack.pop()
        if not node.is_leaf:
            out.append(node)
            stack.extend(node.children)
    return out
