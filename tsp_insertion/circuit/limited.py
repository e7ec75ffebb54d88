from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from tsp_insertion.circuit.heapable import HeapableCircuit
from tsp_insertion.model.distance_to_edge import DistanceToEdge, get_distance_for_heap
from tsp_insertion.model.heap import Heap
from tsp_insertion.model.interfaces import CircuitEdge, CircuitVertex, Deduplicator, PerimeterBuilder


class HeapableCircuitLimited(HeapableCircuit):
    """Variant that tracks only the ``limit`` cheapest perimeter edges per interior vertex.

    When a tracked edge is split, only the cheaper of the two halves replaces
    it, so each vertex never holds more than ``limit`` candidates. Pruned edges
    are never reconsidered; this trades accuracy for a heap that grows with
    ``limit * n`` instead of ``n^2``.
    """

    def __init__(
        self,
        vertices: Sequence[CircuitVertex],
        perimeter_builder: PerimeterBuilder,
        deduplicator: Optional[Deduplicator] = None,
        limit: int = 3,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        super().__init__(vertices, perimeter_builder, deduplicator)
        self.limit = limit

    def _seed_candidates(self, vertices: List[CircuitVertex]) -> None:
        seeded: List[DistanceToEdge] = []
        for v in vertices:
            per_vertex: Heap[DistanceToEdge] = Heap(get_distance_for_heap)
            per_vertex.push_all(DistanceToEdge(v, edge, edge.distance_increase(v)) for edge in self._edges)
            per_vertex.trim_to_smallest(self.limit)
            seeded.extend(per_vertex.values())
        self._candidates.push_all(seeded)

    def _split_replacements(
        self, current: DistanceToEdge, edge_a: CircuitEdge, edge_b: CircuitEdge
    ) -> Tuple[DistanceToEdge, ...]:
        v = current.vertex
        if edge_a.distance_increase(v) <= edge_b.distance_increase(v):
            return (self._rescore(current, edge_a),)
        return (self._rescore(current, edge_b),)


__all__ = ["HeapableCircuitLimited"]
