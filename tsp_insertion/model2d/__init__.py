"""Planar vertices, edges and the convex-hull perimeter builder."""

from tsp_insertion.model2d.edge2d import Edge2D
from tsp_insertion.model2d.perimeter2d import PerimeterBuilder2D
from tsp_insertion.model2d.utils2d import deduplicate_vertices_2d
from tsp_insertion.model2d.vertex2d import Vertex2D

__all__ = ["Vertex2D", "Edge2D", "PerimeterBuilder2D", "deduplicate_vertices_2d"]
