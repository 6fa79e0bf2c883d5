"""Multi-resolution cluster selection from single-linkage merge streams."""
from rcl.errors import (
    ConfigError,
    DanglingReference,
    DuplicateRoot,
    InvalidStream,
    RclError,
)
from rcl.config import format_resolution, parse_resolutions
from rcl.tree import (
    Forest,
    ForestBuilder,
    MergeEvent,
    Node,
    ResolutionClustering,
    build_forest,
    cut_resolutions,
    events_from_linkage,
    read_merge_events,
    write_resolution_files,
)
from rcl.resmap import assign_rungs, build_resolution_map, read_resmap, render_dot, write_resmap

__all__ = [
    "RclError",
    "ConfigError",
    "InvalidStream",
    "DanglingReference",
    "DuplicateRoot",
    "format_resolution",
    "parse_resolutions",
    "Forest",
    "ForestBuilder",
    "MergeEvent",
    "Node",
    "ResolutionClustering",
    "build_forest",
    "cut_resolutions",
    "events_from_linkage",
    "read_merge_events",
    "write_resolution_files",
    "assign_rungs",
    "build_resolution_map",
    "read_resmap",
    "render_dot",
    "write_resmap",
]
