from __future__ import annotations

from typing import List, Sequence

from tsp_insertion.common.constants import THRESHOLD
from tsp_insertion.model2d.vertex2d import Vertex2D


def deduplicate_vertices_2d(vertices: Sequence[Vertex2D]) -> List[Vertex2D]:
    """Drop vertices within ``THRESHOLD`` of an earlier one, returning them sorted by x then y.

    Sorting keeps the cost at O(n log n); only kept vertices whose x is within
    tolerance are compared, so near-duplicates that sort apart because of their
    y coordinate are still caught. The input sequence is not modified.
    """
    unique: List[Vertex2D] = []
    for v in sorted(vertices, key=lambda p: (p.x, p.y)):
        duplicate = False
        for kept in reversed(unique):
            if v.x - kept.x >= THRESHOLD:
                break
            if abs(v.y - kept.y) < THRESHOLD:
                duplicate = True
                break
        if not duplicate:
            unique.append(v)
    return unique


def midpoint_2d(vertices: Sequence[Vertex2D]) -> Vertex2D:
    n = len(vertices)
    return Vertex2D(sum(v.x for v in vertices) / n, sum(v.y for v in vertices) / n)


__all__ = ["deduplicate_vertices_2d", "midpoint_2d"]
