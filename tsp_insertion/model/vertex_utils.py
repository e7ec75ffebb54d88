from __future__ import annotations

import math
from typing import List, Optional, Sequence

from tsp_insertion.common.constants import THRESHOLD
from tsp_insertion.model.interfaces import CircuitEdge, CircuitVertex


def index_of_vertex(vertices: Sequence[CircuitVertex], vertex: CircuitVertex) -> int:
    """Return the index of the first vertex equal to ``vertex`` (tolerance based), or -1."""
    for i, v in enumerate(vertices):
        if v == vertex:
            return i
    return -1


def deduplicate_vertices(vertices: Sequence[CircuitVertex]) -> List[CircuitVertex]:
    """Return the unique vertices in first-seen order, without sorting.

    O(n^2); use it where sorting cannot guarantee that near-equal vertices end up
    adjacent (e.g. 3D points). The result depends on input order when vertices
    chain within tolerance of each other: with A~B and B~C but not A~C, seeing
    B first keeps only B.
    """
    unique: List[CircuitVertex] = []
    for v in vertices:
        if not any(v == kept for kept in unique):
            unique.append(v)
    return unique


def find_closest_edge(vertex: CircuitVertex, edges: Sequence[CircuitEdge]) -> Optional[CircuitEdge]:
    """Edge with the smallest distance increase for ``vertex``, skipping edges that already touch it."""
    closest: Optional[CircuitEdge] = None
    best = math.inf
    for candidate in edges:
        if candidate.start is vertex or candidate.end is vertex:
            continue
        increase = candidate.distance_increase(vertex)
        if increase < best:
            best = increase
            closest = candidate
    return closest


def find_farthest_point(target: CircuitVertex, points: Sequence[CircuitVertex]) -> Optional[CircuitVertex]:
    """Point farthest from ``target``; ties keep the earliest. ``None`` if every point coincides with it."""
    farthest: Optional[CircuitVertex] = None
    farthest_distance = 0.0
    for point in points:
        distance = point.distance_to(target)
        if distance > farthest_distance:
            farthest_distance = distance
            farthest = point
    return farthest


def is_between(value: float, bound_a: float, bound_b: float) -> bool:
    """True when ``value`` lies between the bounds (in either order), within ``THRESHOLD``."""
    if bound_a > bound_b:
        bound_a, bound_b = bound_b, bound_a
    return bound_a - THRESHOLD <= value <= bound_b + THRESHOLD


__all__ = [
    "index_of_vertex",
    "deduplicate_vertices",
    "find_closest_edge",
    "find_farthest_point",
    "is_between",
]
