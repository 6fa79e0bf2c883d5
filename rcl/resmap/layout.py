"""Rung assignment for drawing the resolution map as a leveled DAG."""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional

import networkx as nx

from rcl.config import ResmapSettings
from rcl.errors import InvalidStream
from rcl.resmap.models import LeveledGraph, ResmapNode, ResolutionMap

logger = logging.getLogger(__name__)


def compute_rung(value: float, settings: Optional[ResmapSettings] = None) -> int:
    """floor((value - epsilon) / width), clamped to [0, max_rung]."""
    cfg = settings or ResmapSettings()
    rung = math.floor((value - cfg.rung_epsilon) / cfg.rung_width)
    return min(max(rung, 0), cfg.max_rung)


def resolve_collisions(graph: nx.DiGraph, rungs: Dict[str, int], edges: List[tuple]) -> int:
    """Push children down until no parent shares a rung with its child.

    Sweeps the edges in order and repeats until a sweep changes nothing.
    Returns the number of amendments made.
    """
    if not nx.is_directed_acyclic_graph(graph):
        cycle = nx.find_cycle(graph)
        raise InvalidStream(f"resolution map links contain a cycle: {cycle}")
    amendments = 0
    while True:
        changed = 0
        for parent, child in edges:
            if rungs[parent] == rungs[child]:
                logger.warning(
                    "parent %s and child %s share rung %d (amending)", parent, child, rungs[parent]
                )
                rungs[child] += 1
                changed += 1
        amendments += changed
        if not changed:
            return amendments


def assign_rungs(
    resmap: ResolutionMap,
    minres: int = 0,
    settings: Optional[ResmapSettings] = None,
) -> LeveledGraph:
    """Drop nodes below `minres` (and their links), then assign rungs."""
    cfg = settings or ResmapSettings()
    nodes: Dict[str, ResmapNode] = {}
    n_skipped_nodes = 0
    for node in resmap.nodes:
        if node.size < minres:
            n_skipped_nodes += 1
            continue
        nodes[node.name] = node

    graph = nx.DiGraph()
    graph.add_nodes_from(nodes)
    edges: List[tuple] = []
    parents: Dict[str, None] = {}
    n_skipped_links = 0
    for link in resmap.links:
        if link.parent not in nodes or link.child not in nodes:
            n_skipped_links += 1
            continue
        edges.append((link.parent, link.child))
        graph.add_edge(link.parent, link.child)
        parents[link.parent] = None

    rungs = {name: compute_rung(node.value, cfg) for name, node in nodes.items()}
    logger.info("highest rung at %d", max(rungs.values(), default=0))
    logger.info("blanked %d nodes and %d edges", n_skipped_nodes, n_skipped_links)

    amendments = resolve_collisions(graph, rungs, edges)
    return LeveledGraph(
        nodes=nodes,
        rungs=rungs,
        edges=edges,
        parents=list(parents),
        max_rung=max(rungs.values(), default=0),
        n_skipped_nodes=n_skipped_nodes,
        n_skipped_links=n_skipped_links,
        n_amendments=amendments,
    )
