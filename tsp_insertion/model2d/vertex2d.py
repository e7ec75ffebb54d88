from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict

from tsp_insertion.common.constants import THRESHOLD

if TYPE_CHECKING:  # pragma: no cover
    from tsp_insertion.model2d.edge2d import Edge2D


@dataclass(eq=False)
class Vertex2D:
    """A point in the plane.

    Equality is tolerance based (``THRESHOLD`` per coordinate) while hashing is by
    identity, so two separately constructed points at the same location compare
    equal but remain distinct set members and dict keys.
    """

    x: float
    y: float

    def distance_to(self, other: "Vertex2D") -> float:
        return math.sqrt(self.distance_to_squared(other))

    def distance_to_squared(self, other: "Vertex2D") -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        return dx * dx + dy * dy

    def edge_to(self, other: "Vertex2D") -> "Edge2D":
        from tsp_insertion.model2d.edge2d import Edge2D

        return Edge2D(self, other)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Vertex2D):
            return NotImplemented
        return abs(self.x - other.x) < THRESHOLD and abs(self.y - other.y) < THRESHOLD

    __hash__ = object.__hash__

    # ------------------------------------------------------------------
    #  Vector helpers
    # ------------------------------------------------------------------
    def add(self, other: "Vertex2D") -> "Vertex2D":
        return Vertex2D(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vertex2D") -> "Vertex2D":
        return Vertex2D(self.x - other.x, self.y - other.y)

    def multiply(self, scalar: float) -> "Vertex2D":
        return Vertex2D(self.x * scalar, self.y * scalar)

    def dot_product(self, other: "Vertex2D") -> float:
        return self.x * other.x + self.y * other.y

    def left_perpendicular(self) -> "Vertex2D":
        return Vertex2D(-self.y, self.x)

    def right_perpendicular(self) -> "Vertex2D":
        return Vertex2D(self.y, -self.x)

    # ------------------------------------------------------------------
    #  Relation to an edge
    # ------------------------------------------------------------------
    def is_left_of(self, edge: "Edge2D") -> bool:
        return edge.vector.left_perpendicular().dot_product(self.subtract(edge.start)) > THRESHOLD

    def is_right_of(self, edge: "Edge2D") -> bool:
        return edge.vector.right_perpendicular().dot_product(self.subtract(edge.start)) > THRESHOLD

    def project_to_edge(self, edge: "Edge2D") -> "Vertex2D":
        """Projection onto the infinite line through ``edge``."""
        return edge.start.add(edge.vector.multiply(self.subtract(edge.start).dot_product(edge.vector)))

    def distance_to_edge(self, edge: "Edge2D") -> float:
        return self.distance_to(self.project_to_edge(edge))

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    def __repr__(self) -> str:
        return f"Vertex2D({self.x:g}, {self.y:g})"


__all__ = ["Vertex2D"]
