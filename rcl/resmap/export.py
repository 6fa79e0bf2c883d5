"""Build, write and read resolution-map (resdot) records."""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, TextIO, Union

from rcl.errors import InvalidStream
from rcl.resmap.models import ResmapLink, ResmapNode, ResolutionMap
from rcl.tree.cutter import ResolutionClustering
from rcl.tree.models import Node

logger = logging.getLogger(__name__)


def cluster_name(label: str, node: Node) -> str:
    """`r<label>_<index>`, or `r<label>_x<item>` for singletons."""
    if node.is_leaf:
        return f"r{label}_x{node.item}"
    return f"r{label}_{node.index}"


def _first_item(node: Node) -> str:
    return next(node.iter_items())


def build_resolution_map(clusterings: Sequence[ResolutionClustering]) -> ResolutionMap:
    """Describe how clusters nest across consecutive resolutions.

    Clusters smaller than the smallest resolution are left out. A node's
    `missing` is the percentage of its items that, one level finer, land in
    clusters smaller than that finer resolution.
    """
    levels = sorted(clusterings, key=lambda c: c.resolution, reverse=True)
    resmap = ResolutionMap()
    if not levels:
        return resmap
    min_size = levels[-1].resolution

    for depth, level in enumerate(levels):
        finer = levels[depth + 1] if depth + 1 < len(levels) else None
        peeled: Dict[int, int] = {}
        children: Dict[int, List[Node]] = {}
        if finer is not None:
            owner = level.membership()
            for sub in finer.clusters:
                pos = owner[_first_item(sub)]
                if sub.size < finer.resolution:
                    peeled[pos] = peeled.get(pos, 0) + sub.size
                children.setdefault(pos, []).append(sub)

        for pos, node in enumerate(level.clusters):
            if node.size < min_size:
                continue
            name = cluster_name(level.label, node)
            resmap.nodes.append(ResmapNode(
                name=name,
                value=node.value,
                size=node.size,
                missing=round(100 * peeled.get(pos, 0) / node.size),
            ))
            for sub in children.get(pos, []):
                if sub.size >= min_size:
                    resmap.links.append(ResmapLink(parent=name, child=cluster_name(finer.label, sub)))

    logger.info(
        "Resolution map: %d nodes, %d links over %d levels",
        len(resmap.nodes), len(resmap.links), len(levels),
    )
    return resmap


def write_resmap(resmap: ResolutionMap, path: Union[str, Path]) -> Path:
    """Write nodes first, then links; the layout reader relies on that order."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        for node in resmap.nodes:
            handle.write(f"node\t{node.name}\t{node.value:.10g}\t{node.size}\t{node.missing}\n")
        for link in resmap.links:
            handle.write(f"link\t{link.parent}\t{link.child}\n")
    logger.info("Wrote resolution map to %s", path)
    return path


def read_resmap(lines: Union[Iterable[str], TextIO]) -> ResolutionMap:
    """Parse tab-separated `node`/`link` records."""
    resmap = ResolutionMap()
    for line_no, text in enumerate(lines, start=1):
        text = text.rstrip("\r\n")
        if not text.strip():
            continue
        fields = text.split("\t")
        kind, rest = fields[0], fields[1:]
        if kind == "node":
            if len(rest) != 4:
                raise InvalidStream(f"expect 4 data fields for node, found {len(rest)}", line_no)
            name, value, size, missing = rest
            try:
                numbers = [float(value), float(size), float(missing)]
            except ValueError as exc:
                raise InvalidStream(f"non-numeric node field in '{text}'", line_no) from exc
            if not all(math.isfinite(x) for x in numbers):
                raise InvalidStream(f"non-finite node field in '{text}'", line_no)
            resmap.nodes.append(ResmapNode(
                name=name,
                value=numbers[0],
                size=int(numbers[1]),
                missing=numbers[2],
            ))
        elif kind == "link":
            if len(rest) != 2:
                raise InvalidStream(f"expect 2 data fields for link, found {len(rest)}", line_no)
            resmap.links.append(ResmapLink(parent=rest[0], child=rest[1]))
        else:
            logger.debug("Ignoring record of type %r at line %d", kind, line_no)
    return resmap
