"""Resolution map: cluster nesting across resolutions and its leveled layout."""
from rcl.resmap.models import LeveledGraph, ResmapLink, ResmapNode, ResolutionMap
from rcl.resmap.export import build_resolution_map, read_resmap, write_resmap
from rcl.resmap.layout import assign_rungs, compute_rung, resolve_collisions
from rcl.resmap.dot import render_dot
