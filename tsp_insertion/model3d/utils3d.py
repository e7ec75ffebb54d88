from __future__ import annotations

from typing import List, Sequence

from tsp_insertion.model.vertex_utils import deduplicate_vertices
from tsp_insertion.model3d.vertex3d import Vertex3D


def deduplicate_vertices_3d(vertices: Sequence[Vertex3D]) -> List[Vertex3D]:
    """Unique vertices in input order.

    Sorting by one axis first can separate near-equal points that differ only
    slightly on that axis while a far-away point sorts between them, so this
    uses the pairwise O(n^2) comparison instead.
    """
    return deduplicate_vertices(vertices)


def midpoint_3d(vertices: Sequence[Vertex3D]) -> Vertex3D:
    n = len(vertices)
    return Vertex3D(
        sum(v.x for v in vertices) / n,
        sum(v.y for v in vertices) / n,
        sum(v.z for v in vertices) / n,
    )


__all__ = ["deduplicate_vertices_3d", "midpoint_3d"]
