from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict

from tsp_insertion.common.constants import THRESHOLD

if TYPE_CHECKING:  # pragma: no cover
    from tsp_insertion.model3d.edge3d import Edge3D


@dataclass(eq=False)
class Vertex3D:
    """A point in space; tolerance-based ``==``, identity hash (see ``Vertex2D``)."""

    x: float
    y: float
    z: float

    def distance_to(self, other: "Vertex3D") -> float:
        return math.sqrt(self.distance_to_squared(other))

    def distance_to_squared(self, other: "Vertex3D") -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        dz = other.z - self.z
        return dx * dx + dy * dy + dz * dz

    def edge_to(self, other: "Vertex3D") -> "Edge3D":
        from tsp_insertion.model3d.edge3d import Edge3D

        return Edge3D(self, other)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Vertex3D):
            return NotImplemented
        return (
            abs(self.x - other.x) < THRESHOLD
            and abs(self.y - other.y) < THRESHOLD
            and abs(self.z - other.z) < THRESHOLD
        )

    __hash__ = object.__hash__

    def add(self, other: "Vertex3D") -> "Vertex3D":
        return Vertex3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: "Vertex3D") -> "Vertex3D":
        return Vertex3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def multiply(self, scalar: float) -> "Vertex3D":
        return Vertex3D(self.x * scalar, self.y * scalar, self.z * scalar)

    def dot_product(self, other: "Vertex3D") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def project_to_edge(self, edge: "Edge3D") -> "Vertex3D":
        """Closest point to this vertex on the infinite line through ``edge``."""
        vector = edge.vector
        dot = self.subtract(edge.start).dot_product(vector)
        return edge.start.add(vector.multiply(dot))

    def distance_to_edge(self, edge: "Edge3D") -> float:
        return self.distance_to(self.project_to_edge(edge))

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    def __repr__(self) -> str:
        return f"Vertex3D({self.x:g}, {self.y:g}, {self.z:g})"


__all__ = ["Vertex3D"]
