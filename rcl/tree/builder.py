"""Single-pass construction of the merge forest from a join-order stream."""
from __future__ import annotations

import logging
import time
from typing import Dict, Iterable, List, Optional

from rcl.errors import DanglingReference, DuplicateRoot, InvalidStream
from rcl.tree.models import Forest, MergeEvent, Node

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 100_000


class ForestBuilder:
    """Accumulates merge events into an arena of immutable nodes.

    External cluster ids are recycled by the stream, so each id maps to an
    arena index through `_representative`; a merged node's slot in
    `_absorbed_by` points at the node that consumed it, which lets any id
    still naming an old node resolve to its current root.
    """

    def __init__(self) -> None:
        self._nodes: List[Node] = []
        self._representative: Dict[int, int] = {}
        self._absorbed_by: List[Optional[int]] = []
        self._roots: Dict[int, None] = {}  # Ordered set of arena indices
        self._n_merges = 0
        self._frozen = False

    @property
    def n_merges(self) -> int:
        return self._n_merges

    def _register(self, node: Node) -> Node:
        self._nodes.append(node)
        self._absorbed_by.append(None)
        self._roots[node.index] = None
        return node

    def _current(self, idx: int) -> int:
        root = idx
        while self._absorbed_by[root] is not None:
            root = self._absorbed_by[root]
        # Path compression on the bookkeeping table; nodes stay untouched.
        while self._absorbed_by[idx] is not None and self._absorbed_by[idx] != root:
            self._absorbed_by[idx], idx = root, self._absorbed_by[idx]
        return root

    def _resolve(self, cluster_id: int, stated_size: int, item: str, line: Optional[int]) -> Node:
        idx = self._representative.get(cluster_id)
        if idx is None:
            if stated_size != 1:
                raise DanglingReference(
                    f"cluster {cluster_id} of size {stated_size} has no prior node", line
                )
            leaf = self._register(Node(
                index=len(self._nodes),
                name=f"L0.{cluster_id}",
                size=1,
                lss=0,
                item=item,
            ))
            self._representative[cluster_id] = leaf.index
            return leaf

        idx = self._current(idx)
        self._representative[cluster_id] = idx
        node = self._nodes[idx]
        if stated_size == 1 and node.size != 1:
            raise DuplicateRoot(
                f"singleton {cluster_id} re-announced after being merged into {node.name}", line
            )
        if node.size != stated_size:
            raise InvalidStream(
                f"cluster {cluster_id} stated size {stated_size}, but {node.name} has size {node.size}",
                line,
            )
        return node

    def add(self, event: MergeEvent) -> Node:
        """Apply one merge event and return the node it creates."""
        if self._frozen:
            raise RuntimeError("ForestBuilder.add called after finish()")
        line = event.line
        sides = [
            (event.cluster_id_x, event.cluster_size_x, event.repr_item_x),
            (event.cluster_id_y, event.cluster_size_y, event.repr_item_y),
        ]
        # Smaller id first; affects naming and child order only.
        if event.cluster_id_y < event.cluster_id_x:
            sides.reverse()
        (n1, size1, item1), (n2, size2, item2) = sides

        left = self._resolve(n1, size1, item1, line)
        right = self._resolve(n2, size2, item2, line)
        if left is right:
            raise DuplicateRoot(f"clusters {n1} and {n2} both resolve to {left.name}", line)

        self._n_merges += 1
        parent = self._register(Node(
            index=len(self._nodes),
            name=f"L{self._n_merges}.{n1}",
            size=left.size + right.size,
            lss=max(left.lss, right.lss, min(left.size, right.size)),
            quality=event.quality,
            value=event.similarity,
            left=left,
            right=right,
        ))
        for child in (left, right):
            del self._roots[child.index]
            self._absorbed_by[child.index] = parent.index
        self._representative[n1] = parent.index
        self._representative[n2] = parent.index
        return parent

    def finish(self) -> Forest:
        """Freeze the builder and hand out the forest."""
        self._frozen = True
        return Forest(
            nodes=tuple(self._nodes),
            roots=tuple(self._nodes[idx] for idx in self._roots),
            n_events=self._n_merges,
        )


def build_forest(events: Iterable[MergeEvent]) -> Forest:
    """Consume a merge stream in order and return the frozen forest.

    Errors propagate unchanged; a partially built forest is never returned.
    """
    t_start = time.time()
    builder = ForestBuilder()
    for event in events:
        builder.add(event)
        if builder.n_merges % PROGRESS_EVERY == 0:
            logger.info("Processed %d merge events", builder.n_merges)
    forest = builder.finish()
    logger.info(
        "Built forest: %d events, %d nodes, %d roots, %d items in %.2fs",
        forest.n_events,
        len(forest.nodes),
        len(forest.roots),
        forest.n_items,
        time.time() - t_start,
    )
    return forest
