"""Geometry-agnostic building blocks: heap, insertion candidates and edge-list topology."""

from tsp_insertion.model.distance_to_edge import DistanceToEdge, get_distance_for_heap
from tsp_insertion.model.edge_utils import (
    index_of_edge,
    merge_edges_by_index,
    merge_edges_by_vertex,
    merge_edges_copy,
    move_vertex,
    split_edge,
    split_edge_copy,
)
from tsp_insertion.model.errors import CircuitDesyncError
from tsp_insertion.model.heap import Heap
from tsp_insertion.model.interfaces import CircuitEdge, CircuitVertex, Deduplicator, PerimeterBuilder
from tsp_insertion.model.vertex_utils import deduplicate_vertices, find_closest_edge, find_farthest_point

__all__ = [
    "Heap",
    "DistanceToEdge",
    "get_distance_for_heap",
    "CircuitDesyncError",
    "CircuitEdge",
    "CircuitVertex",
    "Deduplicator",
    "PerimeterBuilder",
    "index_of_edge",
    "split_edge",
    "split_edge_copy",
    "merge_edges_by_index",
    "merge_edges_by_vertex",
    "merge_edges_copy",
    "move_vertex",
    "deduplicate_vertices",
    "find_closest_edge",
    "find_farthest_point",
]
