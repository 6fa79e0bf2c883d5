"""Writers for per-resolution cluster files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Union

from rcl.tree.cutter import ResolutionClustering

logger = logging.getLogger(__name__)


def resolution_path(prefix: Union[str, Path], label: str, output_dir: Union[str, Path] = ".") -> Path:
    """`<output_dir>/<prefix>.res<label>.info`"""
    return Path(output_dir) / f"{prefix}.res{label}.info"


def write_clustering(clustering: ResolutionClustering, path: Path) -> Path:
    """Write one `size<TAB>quality<TAB>items` line per cluster, largest first."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        for record in clustering.iter_records():
            handle.write(record.to_line() + "\n")
    logger.info("Wrote %d clusters to %s", len(clustering.clusters), path)
    return path


def write_resolution_files(
    clusterings: Sequence[ResolutionClustering],
    prefix: Union[str, Path],
    output_dir: Union[str, Path] = ".",
) -> List[Path]:
    """Write every clustering to its resolution-tagged file."""
    return [
        write_clustering(clustering, resolution_path(prefix, clustering.label, output_dir))
        for clustering in clusterings
    ]
