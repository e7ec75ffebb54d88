"""Convex-hull perimeter for planar point sets.

The hull is grown from a two-point seed by repeatedly splicing in the exterior
point that lies farthest from its closest hull edge, the same expansion order a
quickhull uses. Edges come out counter-clockwise, so any point still outside
the hull is to the right of its closest edge.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Set, Tuple

from tsp_insertion.model.distance_to_edge import DistanceToEdge
from tsp_insertion.model.edge_utils import split_edge
from tsp_insertion.model.vertex_utils import find_farthest_point
from tsp_insertion.model2d.edge2d import Edge2D
from tsp_insertion.model2d.utils2d import midpoint_2d
from tsp_insertion.model2d.vertex2d import Vertex2D

logger = logging.getLogger(__name__)


class PerimeterBuilder2D:
    def build_perimeter(self, vertices: Sequence[Vertex2D]) -> Tuple[List[Edge2D], Set[Vertex2D]]:
        """Return the hull edges (counter-clockwise) and the set of points not on the hull.

        Raises ``ValueError`` when fewer than two distinct points are supplied.
        """
        if len(vertices) < 2:
            raise ValueError("At least two vertices are required to build a perimeter")

        unattached: Dict[Vertex2D, None] = dict.fromkeys(vertices)

        # 1-2. The point farthest from the centroid, then the point farthest from that one.
        farthest_from_mid = find_farthest_point(midpoint_2d(vertices), vertices)
        if farthest_from_mid is None:
            raise ValueError("All vertices coincide; no perimeter can be built")
        farthest_from_farthest = find_farthest_point(farthest_from_mid, vertices)
        if farthest_from_farthest is None:
            raise ValueError("All vertices coincide; no perimeter can be built")
        del unattached[farthest_from_mid]
        del unattached[farthest_from_farthest]

        # 3. Degenerate two-edge loop; the third point fixes the orientation.
        edges: List[Edge2D] = [
            Edge2D(farthest_from_mid, farthest_from_farthest),
            Edge2D(farthest_from_farthest, farthest_from_mid),
        ]

        # 4. Both seed edges lie on the same line, so the side of edge 0 decides which one is closest.
        exterior: Dict[Vertex2D, DistanceToEdge] = {}
        for v in unattached:
            edge = edges[1] if v.is_left_of(edges[0]) else edges[0]
            exterior[v] = DistanceToEdge(v, edge, v.distance_to_edge(edge))

        # 5. Splice in the exterior point farthest from its closest edge until none remain.
        while exterior:
            farthest = None
            for candidate in exterior.values():
                if farthest is None or candidate.distance > farthest.distance:
                    farthest = candidate
            if farthest.distance <= 0.0:
                # Remaining points sit on the hull line; they are handled as interior points.
                break

            edges, index = split_edge(edges, farthest.edge, farthest.vertex)
            del unattached[farthest.vertex]
            del exterior[farthest.vertex]
            edge_a, edge_b = edges[index], edges[index + 1]

            for v, closest in list(exterior.items()):
                if closest.edge is not farthest.edge:
                    continue
                outside_a, outside_b = v.is_right_of(edge_a), v.is_right_of(edge_b)
                if not (outside_a or outside_b):
                    # Inside the new triangle (or on its border).
                    del exterior[v]
                    continue
                if outside_a and outside_b:
                    use_a = edge_a.distance_increase(v) < edge_b.distance_increase(v)
                else:
                    use_a = outside_a
                new_edge = edge_a if use_a else edge_b
                exterior[v] = DistanceToEdge(v, new_edge, v.distance_to_edge(new_edge))

        logger.debug("2D perimeter: %d hull vertices, %d interior", len(edges), len(unattached))
        return edges, set(unattached)


__all__ = ["PerimeterBuilder2D"]
