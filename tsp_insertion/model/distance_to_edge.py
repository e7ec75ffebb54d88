from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from tsp_insertion.model.interfaces import CircuitEdge, CircuitVertex


@dataclass(frozen=True, eq=False)
class DistanceToEdge:
    """Candidate insertion: placing ``vertex`` on ``edge`` changes the tour by ``distance``.

    For an unattached vertex ``distance`` is the edge's distance increase. For a
    vertex already in the tour it is the net change of relocating it, which may
    be negative.
    """

    vertex: CircuitVertex
    edge: CircuitEdge
    distance: float

    def has_vertex(self, other: "DistanceToEdge") -> bool:
        """True when ``other`` refers to the same vertex object as this entry."""
        return other.vertex is self.vertex

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vertex": _describe(self.vertex),
            "edge": {"start": _describe(self.edge.start), "end": _describe(self.edge.end)},
            "distance": self.distance,
        }

    def __repr__(self) -> str:
        return f"DistanceToEdge(vertex={self.vertex!r}, edge={self.edge!r}, distance={self.distance:.6f})"


def get_distance_for_heap(entry: DistanceToEdge) -> float:
    """Priority function for heaps of :class:`DistanceToEdge`."""
    return entry.distance


def _describe(vertex: CircuitVertex) -> Any:
    to_dict = getattr(vertex, "to_dict", None)
    return to_dict() if callable(to_dict) else repr(vertex)


__all__ = ["DistanceToEdge", "get_distance_for_heap"]
