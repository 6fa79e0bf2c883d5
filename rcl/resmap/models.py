"""Data models for the resolution map (cluster nesting across resolutions)."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

_LEAF_PATTERN = re.compile(r"_x(\S+)")


@dataclass(frozen=True)
class ResmapNode:
    """A cluster at one resolution level."""

    name: str
    value: float  # Merge value of the cluster's tree node
    size: int
    missing: float  # Percent of items peeling off below the next resolution

    @property
    def leaf(self) -> str:
        """Item label for singleton clusters named `..._x<item>`, else ''."""
        match = _LEAF_PATTERN.search(self.name)
        return match.group(1) if match else ""


@dataclass(frozen=True)
class ResmapLink:
    """Containment of `child` (finer level) in `parent` (coarser level)."""

    parent: str
    child: str


@dataclass
class ResolutionMap:
    """Typed node/link records, in file order."""

    nodes: List[ResmapNode] = field(default_factory=list)
    links: List[ResmapLink] = field(default_factory=list)


@dataclass
class LeveledGraph:
    """Rung assignment ready for a layered renderer."""

    nodes: Dict[str, ResmapNode]
    rungs: Dict[str, int]
    edges: List[Tuple[str, str]]
    parents: List[str]  # Nodes with at least one retained child
    max_rung: int
    n_skipped_nodes: int = 0
    n_skipped_links: int = 0
    n_amendments: int = 0

    def bands(self) -> Dict[int, List[str]]:
        """Node names grouped by rung, every rung 0..max_rung present."""
        grouped: Dict[int, List[str]] = {rung: [] for rung in range(self.max_rung + 1)}
        for name, rung in self.rungs.items():
            grouped[rung].append(name)
        return grouped
