"""Tabular summaries of a multi-resolution run."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from rcl.config import DEFAULT_SHARED_WINDOW, DEFAULT_SUMMARY_TOP
from rcl.resmap.export import cluster_name
from rcl.tree.cutter import ResolutionClustering

logger = logging.getLogger(__name__)

NESTING_COLUMNS = ["resolution", "cluster", "size", "quality", "parent"]


def granularity_summary(
    clusterings: Sequence[ResolutionClustering],
    top: int = DEFAULT_SUMMARY_TOP,
    window: int = DEFAULT_SHARED_WINDOW,
) -> pd.DataFrame:
    """Per resolution: cluster count, largest sizes, and clusters shared with the previous level.

    `shared` counts how many of the `window` largest clusters are the very
    same tree node as one of the `window` largest at the previous, coarser
    resolution; it is missing (NA) for the coarsest level.
    """
    rows = []
    previous = None
    for clustering in sorted(clusterings, key=lambda c: c.resolution, reverse=True):
        head = clustering.clusters[:window]
        shared = None
        if previous is not None:
            shared = sum(1 for node in head if node in previous)
        rows.append({
            "resolution": clustering.label,
            "n_clusters": len(clustering.clusters),
            "shared": shared,
            "largest": " ".join(str(s) for s in clustering.sizes[:top]),
        })
        previous = set(head)
    frame = pd.DataFrame(rows, columns=["resolution", "n_clusters", "shared", "largest"])
    frame["shared"] = pd.array([row["shared"] for row in rows], dtype="Int64")
    return frame


def nesting_table(clusterings: Sequence[ResolutionClustering]) -> pd.DataFrame:
    """One row per emitted cluster, naming its container one level coarser."""
    rows: List[dict] = []
    owner = None
    coarser = None
    for clustering in sorted(clusterings, key=lambda c: c.resolution, reverse=True):
        for node in clustering.clusters:
            parent = ""
            if owner is not None:
                container = coarser.clusters[owner[next(node.iter_items())]]
                parent = cluster_name(coarser.label, container)
            rows.append({
                "resolution": clustering.label,
                "cluster": cluster_name(clustering.label, node),
                "size": node.size,
                "quality": round(node.normalized_quality, 3),
                "parent": parent,
            })
        owner = clustering.membership()
        coarser = clustering
    return pd.DataFrame(rows, columns=NESTING_COLUMNS)


def write_nesting_table(frame: pd.DataFrame, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, sep="\t", index=False)
    logger.info("Wrote nesting table (%d rows) to %s", len(frame), path)
    return path


def log_granularity(frame: pd.DataFrame) -> None:
    for row in frame.itertuples(index=False):
        shared = "--" if pd.isna(row.shared) else str(row.shared)
        logger.info(
            "res %-8s (%2s) %6d clusters: %s",
            row.resolution, shared, row.n_clusters, row.largest,
        )
