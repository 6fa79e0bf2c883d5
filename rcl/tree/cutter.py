"""Multi-resolution top-down cuts of a merge forest."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple, Union

from rcl.config import format_resolution, parse_resolutions
from rcl.tree.models import Forest, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClusterRecord:
    """One output line of a resolution clustering."""

    size: int
    quality: str  # quality / size, three decimals
    items: List[str]

    def to_line(self) -> str:
        return f"{self.size}\t{self.quality}\t{' '.join(self.items)}"


@dataclass(frozen=True)
class ResolutionClustering:
    """Clusters emitted at one resolution, largest first."""

    resolution: float
    clusters: Tuple[Node, ...]
    n_visited: int = 0

    @property
    def label(self) -> str:
        return format_resolution(self.resolution)

    @property
    def sizes(self) -> List[int]:
        return [node.size for node in self.clusters]

    def iter_records(self) -> Iterator[ClusterRecord]:
        for node in self.clusters:
            yield ClusterRecord(
                size=node.size,
                quality="%.3f" % node.normalized_quality,
                items=node.items,
            )

    def membership(self) -> Dict[str, int]:
        """Map each item to the position of its cluster in `clusters`."""
        assignment: Dict[str, int] = {}
        for pos, node in enumerate(self.clusters):
            for item in node.iter_items():
                assignment[item] = pos
        return assignment


def cut_resolution(frontier: Iterable[Node], resolution: float) -> Tuple[List[Node], int]:
    """Descend from `frontier` until no node splits into two parts >= resolution.

    Returns the emitted nodes in discovery order and the number of stack pops.
    """
    stack: List[Node] = list(frontier)
    emitted: List[Node] = []
    visited = 0
    while stack:
        node = stack.pop()
        visited += 1
        if node.lss >= resolution and node.left is not None:
            stack.append(node.left)
            stack.append(node.right)
        else:
            emitted.append(node)
    return emitted, visited


def cut_resolutions(
    source: Union[Forest, Sequence[Node]],
    resolutions: Iterable[Union[str, int, float]],
) -> List[ResolutionClustering]:
    """Cut the forest at every resolution, coarsest first.

    Each pass starts from the previous pass's clusters rather than from the
    roots, so every finer clustering refines every coarser one.
    """
    ordered = parse_resolutions(resolutions)
    roots = source.roots if isinstance(source, Forest) else tuple(source)
    # Largest roots at the bottom of the stack, as they are popped last.
    frontier: List[Node] = sorted(roots, key=lambda n: n.size, reverse=True)

    results: List[ResolutionClustering] = []
    for resolution in ordered:
        t_start = time.time()
        logger.info("Processing resolution %s", format_resolution(resolution))
        emitted, visited = cut_resolution(frontier, resolution)
        clusters = tuple(sorted(emitted, key=lambda n: n.size, reverse=True))
        results.append(ResolutionClustering(
            resolution=resolution,
            clusters=clusters,
            n_visited=visited,
        ))
        logger.debug(
            "resolution %s: %d clusters, %d nodes visited, %.3fs",
            format_resolution(resolution),
            len(clusters),
            visited,
            time.time() - t_start,
        )
        frontier = list(clusters)
    return results
