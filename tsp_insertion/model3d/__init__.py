"""Spatial vertices, edges and the approximate perimeter builder."""

from tsp_insertion.model3d.edge3d import Edge3D
from tsp_insertion.model3d.perimeter3d import PerimeterBuilder3D
from tsp_insertion.model3d.utils3d import deduplicate_vertices_3d
from tsp_insertion.model3d.vertex3d import Vertex3D

__all__ = ["Vertex3D", "Edge3D", "PerimeterBuilder3D", "deduplicate_vertices_3d"]
