from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from tsp_insertion.common.constants import THRESHOLD
from tsp_insertion.model3d.vertex3d import Vertex3D


class Edge3D:
    """Directed segment in space; the unit vector is computed on first use."""

    __slots__ = ("_start", "_end", "_vector", "_length")

    def __init__(self, start: Vertex3D, end: Vertex3D) -> None:
        self._start = start
        self._end = end
        self._length = start.distance_to(end)
        self._vector: Optional[Vertex3D] = None

    @property
    def start(self) -> Vertex3D:
        return self._start

    @property
    def end(self) -> Vertex3D:
        return self._end

    @property
    def length(self) -> float:
        return self._length

    @property
    def vector(self) -> Vertex3D:
        if self._vector is None:
            if self._length > 0.0:
                self._vector = self._end.subtract(self._start).multiply(1.0 / self._length)
            else:
                self._vector = Vertex3D(0.0, 0.0, 0.0)
        return self._vector

    def get_start(self) -> Vertex3D:
        return self._start

    def get_end(self) -> Vertex3D:
        return self._end

    def get_length(self) -> float:
        return self._length

    def distance_increase(self, vertex: Vertex3D) -> float:
        return self._start.distance_to(vertex) + self._end.distance_to(vertex) - self._length

    def split(self, vertex: Vertex3D) -> Tuple["Edge3D", "Edge3D"]:
        return Edge3D(self._start, vertex), Edge3D(vertex, self._end)

    def merge(self, other: "Edge3D") -> "Edge3D":
        return Edge3D(self._start, other.end)

    def intersects(self, other: "Edge3D") -> bool:
        """True if the segments share a point, using the closest points between the two lines."""
        vec21 = self._end.subtract(self._start)
        vec43 = other.end.subtract(other.start)
        vec13 = self._start.subtract(other.start)

        dot4321 = vec43.dot_product(vec21)
        dot4343 = vec43.dot_product(vec43)
        dot2121 = vec21.dot_product(vec21)
        dot1321 = vec13.dot_product(vec21)

        denominator = dot2121 * dot4343 - dot4321 * dot4321
        if abs(denominator) < THRESHOLD:
            # Parallel: collinear when the start-to-start vector is parallel too; then compare extents along this edge.
            dot1313 = vec13.dot_product(vec13)
            if abs(dot2121 * dot1313 - dot1321 * dot1321) >= THRESHOLD:
                return False
            t_start = -dot1321 / dot2121
            t_end = other.end.subtract(self._start).dot_product(vec21) / dot2121
            lo, hi = min(t_start, t_end), max(t_start, t_end)
            return hi >= -THRESHOLD and lo <= 1.0 + THRESHOLD

        dot1343 = vec13.dot_product(vec43)
        along_self = (dot1343 * dot4321 - dot1321 * dot4343) / denominator
        if along_self < -THRESHOLD or along_self > 1.0 + THRESHOLD:
            return False
        along_other = (dot1343 + dot4321 * along_self) / dot4343
        if along_other < -THRESHOLD or along_other > 1.0 + THRESHOLD:
            return False

        point_self = self._start.add(vec21.multiply(along_self))
        point_other = other.start.add(vec43.multiply(along_other))
        return point_self == point_other

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Edge3D):
            return NotImplemented
        return self._start == other._start and self._end == other._end

    __hash__ = object.__hash__

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self._start.to_dict(), "end": self._end.to_dict()}

    def __repr__(self) -> str:
        return f"Edge3D({self._start!r} -> {self._end!r})"


__all__ = ["Edge3D"]
