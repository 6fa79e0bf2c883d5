"""Data models for the single-linkage merge tree."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class MergeEvent:
    """One union of two clusters, as listed in a single-linkage join order."""

    order_index: int
    repr_item_x: str
    repr_item_y: str
    cluster_id_x: int
    cluster_id_y: int
    similarity: float
    cluster_size_x: int
    cluster_size_y: int
    merged_size: int
    edge_count: int
    centrality: float
    quality: float  # Aggregated upstream; carried, never recomputed
    line: Optional[int] = field(default=None, compare=False)  # 1-based input line


@dataclass(frozen=True, eq=False)
class Node:
    """Immutable merge-tree vertex.

    Leaves carry a single item; internal nodes own two children. `lss` is the
    largest stable split: the best min(|left|, |right|) over every split in
    the subtree, so `lss >= R` means the subtree still holds two disjoint
    parts both of size >= R.
    """

    index: int  # Position in the forest arena
    name: str  # "L0.<id>" for leaves, "L<k>.<id>" for the k-th merge
    size: int
    lss: int
    quality: float = 0.0
    value: float = 0.0  # Similarity of the creating merge
    left: Optional["Node"] = None
    right: Optional["Node"] = None
    item: Optional[str] = None  # Leaves only

    @property
    def is_leaf(self) -> bool:
        return self.left is None

    @property
    def children(self) -> Optional[Tuple["Node", "Node"]]:
        if self.left is None or self.right is None:
            return None
        return (self.left, self.right)

    def iter_items(self) -> Iterator[str]:
        """Yield subsumed items, left subtree first, without recursion."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            if node.left is None:
                yield node.item
                continue
            stack.append(node.right)
            stack.append(node.left)

    @property
    def items(self) -> List[str]:
        return list(self.iter_items())

    @property
    def normalized_quality(self) -> float:
        return self.quality / self.size

    def __repr__(self) -> str:
        return f"Node({self.name!r}, size={self.size}, lss={self.lss})"


@dataclass(frozen=True)
class Forest:
    """Frozen result of one build pass over a merge stream."""

    nodes: Tuple[Node, ...]  # Arena, creation order
    roots: Tuple[Node, ...]  # Nodes never subsumed, creation order
    n_events: int

    @property
    def n_items(self) -> int:
        return sum(root.size for root in self.roots)

    def iter_leaves(self) -> Iterator[Node]:
        return (node for node in self.nodes if node.is_leaf)
