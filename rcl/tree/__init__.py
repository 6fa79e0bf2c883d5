"""Merge-tree construction and multi-resolution cutting."""
from rcl.tree.models import Forest, MergeEvent, Node
from rcl.tree.stream import open_merge_stream, parse_record, read_merge_events
from rcl.tree.builder import ForestBuilder, build_forest
from rcl.tree.cutter import (
    ClusterRecord,
    ResolutionClustering,
    cut_resolution,
    cut_resolutions,
)
from rcl.tree.linkage import events_from_linkage
from rcl.tree.output import resolution_path, write_clustering, write_resolution_files
