from __future__ import annotations

from typing import List, Optional, Sequence, Set

from tsp_insertion.model.interfaces import CircuitEdge, CircuitVertex


class CompletedCircuit:
    """A finished tour with nothing left to search.

    Used for inputs too small to need a search (three or fewer distinct
    vertices), and as a lightweight holder for a result once the heavy search
    state has been released.
    """

    def __init__(self, vertices: Sequence[CircuitVertex], length: Optional[float] = None) -> None:
        self.vertices: List[CircuitVertex] = list(vertices)
        self._length = tour_length(self.vertices) if length is None else length

    def prepare(self) -> None:
        pass

    def build_perimeter(self) -> None:
        pass

    def clone_and_update(self) -> None:
        return None

    def get_length(self) -> float:
        return self._length

    def get_length_with_next(self) -> float:
        return self._length

    def get_attached_vertices(self) -> List[CircuitVertex]:
        return list(self.vertices)

    def get_attached_edges(self) -> List[CircuitEdge]:
        n = len(self.vertices)
        if n < 2:
            return []
        return [self.vertices[i].edge_to(self.vertices[(i + 1) % n]) for i in range(n)]

    def get_unattached_vertices(self) -> Set[CircuitVertex]:
        return set()

    def is_complete(self) -> bool:
        return True

    def delete(self) -> None:
        self.vertices = []

    def __repr__(self) -> str:
        return f"CompletedCircuit(vertices={len(self.vertices)}, length={self._length:.6f})"


def tour_length(vertices: Sequence[CircuitVertex]) -> float:
    """Length of the closed tour visiting ``vertices`` in order."""
    n = len(vertices)
    if n < 2:
        return 0.0
    return sum(vertices[i].distance_to(vertices[(i + 1) % n]) for i in range(n))


__all__ = ["CompletedCircuit", "tour_length"]
