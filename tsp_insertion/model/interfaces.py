"""Capabilities the circuit engine needs from vertex, edge and perimeter types.

Any point representation (2D, 3D, graph node, ...) can take part in the search
as long as it provides these methods; no common base class is required.
"""

from __future__ import annotations

from typing import Callable, List, Protocol, Sequence, Set, Tuple, runtime_checkable


@runtime_checkable
class CircuitVertex(Protocol):
    def distance_to(self, other: "CircuitVertex") -> float:
        """Return the (non-negative) distance between the two vertices."""
        ...

    def edge_to(self, other: "CircuitVertex") -> "CircuitEdge":
        ...

    def __eq__(self, other: object) -> bool:
        ...

    def __hash__(self) -> int:
        ...


@runtime_checkable
class CircuitEdge(Protocol):
    @property
    def start(self) -> CircuitVertex:
        ...

    @property
    def end(self) -> CircuitVertex:
        ...

    @property
    def length(self) -> float:
        ...

    def distance_increase(self, vertex: CircuitVertex) -> float:
        """Return ``dist(start, v) + dist(v, end) - length``."""
        ...

    def split(self, vertex: CircuitVertex) -> Tuple["CircuitEdge", "CircuitEdge"]:
        ...

    def merge(self, other: "CircuitEdge") -> "CircuitEdge":
        ...


class PerimeterBuilder(Protocol):
    def build_perimeter(
        self, vertices: Sequence[CircuitVertex]
    ) -> Tuple[List[CircuitEdge], Set[CircuitVertex]]:
        """Return the initial closed sub-tour and the vertices left off it."""
        ...


Deduplicator = Callable[[Sequence[CircuitVertex]], List[CircuitVertex]]

__all__ = ["CircuitVertex", "CircuitEdge", "PerimeterBuilder", "Deduplicator"]
