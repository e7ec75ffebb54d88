from __future__ import annotations

from typing import Any, Dict, Tuple

from tsp_insertion.common.constants import THRESHOLD
from tsp_insertion.model.vertex_utils import is_between
from tsp_insertion.model2d.vertex2d import Vertex2D


class Edge2D:
    """Directed segment ``start -> end`` with its length and unit vector precomputed."""

    __slots__ = ("_start", "_end", "_vector", "_length")

    def __init__(self, start: Vertex2D, end: Vertex2D) -> None:
        self._start = start
        self._end = end
        self._length = start.distance_to(end)
        if self._length > 0.0:
            self._vector = Vertex2D((end.x - start.x) / self._length, (end.y - start.y) / self._length)
        else:
            self._vector = Vertex2D(0.0, 0.0)

    @property
    def start(self) -> Vertex2D:
        return self._start

    @property
    def end(self) -> Vertex2D:
        return self._end

    @property
    def length(self) -> float:
        return self._length

    @property
    def vector(self) -> Vertex2D:
        """Unit vector from start to end."""
        return self._vector

    def get_start(self) -> Vertex2D:
        return self._start

    def get_end(self) -> Vertex2D:
        return self._end

    def get_length(self) -> float:
        return self._length

    def distance_increase(self, vertex: Vertex2D) -> float:
        """Extra length from routing ``start -> vertex -> end`` instead of ``start -> end``.

        With ``|start-end| = 5``, ``|start-v| = 3`` and ``|v-end| = 6`` this is 4.
        """
        return self._start.distance_to(vertex) + self._end.distance_to(vertex) - self._length

    def split(self, vertex: Vertex2D) -> Tuple["Edge2D", "Edge2D"]:
        return Edge2D(self._start, vertex), Edge2D(vertex, self._end)

    def merge(self, other: "Edge2D") -> "Edge2D":
        return Edge2D(self._start, other.end)

    def intersects(self, other: "Edge2D") -> bool:
        """True if the two segments share at least one point (touching ends count)."""
        # Paul Bourke, "Intersection point of two line segments in 2 dimensions".
        e_dx = self._end.x - self._start.x
        e_dy = self._end.y - self._start.y
        o_dx = other.end.x - other.start.x
        o_dy = other.end.y - other.start.y
        denominator = o_dy * e_dx - o_dx * e_dy

        ss_dx = self._start.x - other.start.x
        ss_dy = self._start.y - other.start.y

        if abs(denominator) < THRESHOLD:
            # Parallel: overlap only if collinear and both coordinate ranges meet.
            collinear = (other.start.y - self._start.y) * e_dx - (other.start.x - self._start.x) * e_dy
            return (
                abs(collinear) < THRESHOLD
                and _ranges_meet(self._start.x, self._end.x, other.start.x, other.end.x)
                and _ranges_meet(self._start.y, self._end.y, other.start.y, other.end.y)
            )

        along_self = (o_dx * ss_dy - o_dy * ss_dx) / denominator
        if along_self < -THRESHOLD or along_self > 1.0 + THRESHOLD:
            return False
        along_other = (e_dx * ss_dy - e_dy * ss_dx) / denominator
        return -THRESHOLD <= along_other < 1.0 + THRESHOLD

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Edge2D):
            return NotImplemented
        return self._start == other._start and self._end == other._end

    __hash__ = object.__hash__

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self._start.to_dict(), "end": self._end.to_dict()}

    def __repr__(self) -> str:
        return f"Edge2D({self._start!r} -> {self._end!r})"


def _ranges_meet(a_start: float, a_end: float, b_start: float, b_end: float) -> bool:
    return (
        is_between(a_start, b_start, b_end)
        or is_between(a_end, b_start, b_end)
        or is_between(b_start, a_start, a_end)
        or is_between(b_end, a_start, a_end)
    )


__all__ = ["Edge2D"]
