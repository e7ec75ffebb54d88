"""Approximate outer perimeter for point sets in space.

There is no left/right test in 3D, so a point counts as interior once its
projection onto its closest perimeter edge lies farther from the centroid than
the point itself. The result is a closed loop through outlying points rather
than a true hull, which is all the insertion search needs as a seed.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Sequence, Set, Tuple

from tsp_insertion.model.distance_to_edge import DistanceToEdge
from tsp_insertion.model.edge_utils import merge_edges_by_vertex, split_edge
from tsp_insertion.model.vertex_utils import find_farthest_point
from tsp_insertion.model3d.edge3d import Edge3D
from tsp_insertion.model3d.utils3d import midpoint_3d
from tsp_insertion.model3d.vertex3d import Vertex3D

logger = logging.getLogger(__name__)


def is_interior(vertex: Vertex3D, closest_edge: Edge3D, midpoint: Vertex3D, distance_to_midpoint: float) -> bool:
    return vertex.project_to_edge(closest_edge).distance_to(midpoint) > distance_to_midpoint


class PerimeterBuilder3D:
    def build_perimeter(self, vertices: Sequence[Vertex3D]) -> Tuple[List[Edge3D], Set[Vertex3D]]:
        if len(vertices) < 2:
            raise ValueError("At least two vertices are required to build a perimeter")

        midpoint = midpoint_3d(vertices)
        unattached: Dict[Vertex3D, None] = dict.fromkeys(vertices)
        to_midpoint: Dict[Vertex3D, float] = {v: v.distance_to(midpoint) for v in vertices}

        farthest_from_mid = find_farthest_point(midpoint, vertices)
        if farthest_from_mid is None:
            raise ValueError("All vertices coincide; no perimeter can be built")
        farthest_from_farthest = find_farthest_point(farthest_from_mid, vertices)
        if farthest_from_farthest is None:
            raise ValueError("All vertices coincide; no perimeter can be built")
        del unattached[farthest_from_mid]
        del unattached[farthest_from_farthest]

        # Orientation is arbitrary in 3D, so every point starts against edge 0.
        edges: List[Edge3D] = [
            Edge3D(farthest_from_mid, farthest_from_farthest),
            Edge3D(farthest_from_farthest, farthest_from_mid),
        ]
        exterior: Dict[Vertex3D, DistanceToEdge] = {
            v: DistanceToEdge(v, edges[0], v.distance_to_edge(edges[0])) for v in unattached
        }

        while exterior:
            farthest = None
            for candidate in exterior.values():
                if farthest is None or candidate.distance > farthest.distance:
                    farthest = candidate
            if farthest.distance <= 0.0:
                break

            edges, index = split_edge(edges, farthest.edge, farthest.vertex)
            del unattached[farthest.vertex]
            del exterior[farthest.vertex]

            # Neighbours of the new point may have been swallowed by the wider perimeter.
            n = len(edges)
            if n > 3:
                start, added, end = farthest.edge.start, farthest.vertex, farthest.edge.end
                before_start = edges[(index - 1 + n) % n].start
                after_end = edges[(index + 2) % n].end
                if is_interior(start, before_start.edge_to(added), midpoint, to_midpoint[start]):
                    edges, _, _, _ = merge_edges_by_vertex(edges, start)
                    unattached[start] = None
                if len(edges) > 3 and is_interior(end, added.edge_to(after_end), midpoint, to_midpoint[end]):
                    edges, _, _, _ = merge_edges_by_vertex(edges, end)
                    unattached[end] = None

            for v, closest in list(exterior.items()):
                best_edge = None
                best_distance = math.inf
                for edge in edges:
                    distance = v.distance_to_edge(edge)
                    if distance < best_distance:
                        best_distance = distance
                        best_edge = edge
                if best_edge is not closest.edge and is_interior(v, best_edge, midpoint, to_midpoint[v]):
                    del exterior[v]
                else:
                    exterior[v] = DistanceToEdge(v, best_edge, best_distance)

        logger.debug("3D perimeter: %d perimeter vertices, %d interior", len(edges), len(unattached))
        return edges, set(unattached)


__all__ = ["PerimeterBuilder3D", "is_interior"]
