"""Conversion from scipy linkage matrices to merge streams."""
from __future__ import annotations

from typing import Dict, Iterator, Optional, Sequence

import numpy as np
from scipy.cluster.hierarchy import is_valid_linkage

from rcl.errors import InvalidStream
from rcl.tree.models import MergeEvent


def events_from_linkage(
    linkage_matrix: np.ndarray,
    labels: Optional[Sequence[str]] = None,
) -> Iterator[MergeEvent]:
    """Yield the merge events described by a scipy linkage matrix.

    Ids are recycled the way single-linkage join orders do it: leaf i has id
    i and a merged cluster keeps the smaller id of its two parts. The merge
    height is carried as the event similarity.
    """
    try:
        is_valid_linkage(linkage_matrix, throw=True, name="linkage_matrix")
    except (TypeError, ValueError) as exc:
        raise InvalidStream(f"invalid linkage matrix: {exc}") from exc

    n_leaves = linkage_matrix.shape[0] + 1
    if labels is None:
        labels = [str(i) for i in range(n_leaves)]
    elif len(labels) != n_leaves:
        raise InvalidStream(
            f"linkage describes {n_leaves} leaves but {len(labels)} labels were given"
        )

    # scipy cluster index -> (external id, size, representative label)
    clusters: Dict[int, tuple] = {}

    def lookup(idx: int) -> tuple:
        if idx < n_leaves:
            return (idx, 1, str(labels[idx]))
        return clusters.pop(idx)

    for row, (a, b, height, count) in enumerate(linkage_matrix):
        id_a, size_a, item_a = lookup(int(a))
        id_b, size_b, item_b = lookup(int(b))
        yield MergeEvent(
            order_index=row,
            repr_item_x=item_a,
            repr_item_y=item_b,
            cluster_id_x=id_a,
            cluster_id_y=id_b,
            similarity=float(height),
            cluster_size_x=size_a,
            cluster_size_y=size_b,
            merged_size=int(count),
            edge_count=0,
            centrality=0.0,
            quality=0.0,
        )
        merged_id = min(id_a, id_b)
        clusters[n_leaves + row] = (merged_id, int(count), item_a if merged_id == id_a else item_b)
