"""Clone-on-write circuit state for the best-first insertion search.

A :class:`HeapableCircuit` holds a partial tour (an ordered edge list), the
vertices not yet on it, and a heap of :class:`DistanceToEdge` candidates: one
per (off-tour vertex, tour edge) pair plus relocation candidates for interior
vertices already on the tour. Each call to :meth:`HeapableCircuit.clone_and_update`
consumes the cheapest candidate and either applies it in place or, when the
vertex is already placed and other placements remain to be tried, applies it
to a fork and hands the fork back.

Relocation candidates are kept relative to a per-vertex *baseline*: what the
vertex currently costs where it sits, ``d(prev, v) + d(v, next) - d(prev, next)``.
A candidate's ``distance`` is therefore the net change in tour length from
moving the vertex onto the candidate edge. Perimeter vertices keep a baseline
of zero and are never relocated.
"""

from __future__ import annotations

import copy
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from tsp_insertion.common.constants import THRESHOLD
from tsp_insertion.model.distance_to_edge import DistanceToEdge, get_distance_for_heap
from tsp_insertion.model.edge_utils import move_vertex, split_edge
from tsp_insertion.model.errors import CircuitDesyncError
from tsp_insertion.model.heap import Heap
from tsp_insertion.model.interfaces import CircuitEdge, CircuitVertex, Deduplicator, PerimeterBuilder

logger = logging.getLogger(__name__)


def _same_edge(a: CircuitEdge, b: CircuitEdge) -> bool:
    return a.start is b.start and a.end is b.end


class HeapableCircuit:
    def __init__(
        self,
        vertices: Sequence[CircuitVertex],
        perimeter_builder: PerimeterBuilder,
        deduplicator: Optional[Deduplicator] = None,
    ) -> None:
        self.vertices: List[CircuitVertex] = list(vertices)
        self._perimeter_builder = perimeter_builder
        self._deduplicator = deduplicator
        self._prepared = False
        self._reset()

    def _reset(self) -> None:
        self._edges: List[CircuitEdge] = []
        self._candidates: Heap[DistanceToEdge] = Heap(get_distance_for_heap)
        self._length = 0.0
        self._unattached: Set[CircuitVertex] = set()
        self._perimeter: Set[CircuitVertex] = set()
        self._baseline: Dict[CircuitVertex, float] = {}

    # ------------------------------------------------------------------
    #  Setup
    # ------------------------------------------------------------------
    def prepare(self) -> None:
        """De-duplicate the input (if a deduplicator was given) and clear any state."""
        if self._deduplicator is not None:
            before = len(self.vertices)
            self.vertices = list(self._deduplicator(self.vertices))
            if len(self.vertices) != before:
                logger.debug("Removed %d duplicate vertices", before - len(self.vertices))
        self._reset()
        self._prepared = True

    def build_perimeter(self) -> None:
        """Build the starting tour and seed a candidate for every (interior vertex, perimeter edge) pair."""
        if not self._prepared:
            self.prepare()
        edges, unattached = self._perimeter_builder.build_perimeter(self.vertices)
        self._edges = list(edges)
        self._length = sum(e.length for e in self._edges)
        self._perimeter = {e.start for e in self._edges}
        self._unattached = set(unattached)
        self._baseline = {v: 0.0 for v in self.vertices}
        # Input order keeps equal-cost candidates in a reproducible order.
        self._seed_candidates([v for v in self.vertices if v in self._unattached])
        logger.debug(
            "Perimeter built: %d edges, length %.6f, %d interior vertices, %d candidates",
            len(self._edges),
            self._length,
            len(self._unattached),
            len(self._candidates),
        )

    def _seed_candidates(self, vertices: List[CircuitVertex]) -> None:
        self._candidates.push_all(
            DistanceToEdge(v, edge, edge.distance_increase(v)) for v in vertices for edge in self._edges
        )

    # ------------------------------------------------------------------
    #  Search step
    # ------------------------------------------------------------------
    def clone_and_update(self) -> Optional["HeapableCircuit"]:
        """Consume the cheapest candidate.

        * unattached vertex: attach it in place, return ``None``;
        * placed vertex whose last candidate this is: relocate it in place when
          that shortens the tour, otherwise just drop the candidate; return ``None``;
        * placed vertex with candidates left: return a fork with the vertex
          relocated, this circuit is left unchanged apart from the consumed candidate.

        A complete circuit whose cheapest candidate would not shorten it is
        terminal: nothing is consumed and ``None`` is returned.
        """
        nxt = self._candidates.peek()
        if nxt is None:
            return None
        if self.is_complete() and nxt.distance >= -THRESHOLD:
            return None
        self._candidates.pop()

        if nxt.vertex in self._unattached:
            self._attach_vertex(nxt)
            return None
        if not self._candidates.any_match(nxt.has_vertex):
            if nxt.distance < -THRESHOLD:
                self._move_vertex(nxt)
            return None

        clone = self._fork()
        clone._move_vertex(nxt)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Forked circuit: %r -> %r (delta %.6f), length %.6f -> %.6f",
                nxt.vertex,
                nxt.edge,
                nxt.distance,
                self._length,
                clone._length,
            )
        return clone

    def _fork(self) -> "HeapableCircuit":
        clone = copy.copy(self)
        clone._edges = list(self._edges)
        clone._unattached = set(self._unattached)
        clone._baseline = dict(self._baseline)
        clone._candidates = self._candidates.clone()
        return clone

    # ------------------------------------------------------------------
    #  Mutations
    # ------------------------------------------------------------------
    def _attach_vertex(self, candidate: DistanceToEdge) -> None:
        vertex, target = candidate.vertex, candidate.edge
        self._edges, index = split_edge(self._edges, target, vertex)
        if index < 0:
            raise CircuitDesyncError(
                f"Cannot attach {vertex!r}: edge {target!r} is not in the circuit", vertex, target, self._edges
            )
        edge_a, edge_b = self._edges[index], self._edges[index + 1]

        self._length += candidate.distance
        self._unattached.discard(vertex)
        updated = {vertex, target.start, target.end}
        self._update_baselines(updated)

        def replace(current: DistanceToEdge) -> Tuple[DistanceToEdge, ...]:
            if _same_edge(current.edge, target):
                if current.vertex is vertex:
                    return ()
                return self._split_replacements(current, edge_a, edge_b)
            if current.vertex in updated:
                return (self._rescore(current, current.edge),)
            return (current,)

        self._candidates.replace_all(replace)

    def _move_vertex(self, candidate: DistanceToEdge) -> None:
        vertex, target = candidate.vertex, candidate.edge
        self._edges, merged, split_a, split_b = move_vertex(self._edges, vertex, target)
        if merged is None:
            raise CircuitDesyncError(
                f"Cannot move {vertex!r} onto {target!r}: vertex or edge is not in the circuit",
                vertex,
                target,
                self._edges,
            )

        self._length += candidate.distance
        updated = {vertex, target.start, target.end, merged.start, merged.end}
        self._update_baselines(updated)

        collapsed: Set[CircuitVertex] = set()

        def replace(current: DistanceToEdge) -> Tuple[DistanceToEdge, ...]:
            if current.vertex is vertex:
                return ()
            edge = current.edge
            if edge.start is vertex or edge.end is vertex:
                # Both detached edges collapse into one candidate on the merged edge.
                if current.vertex in collapsed:
                    return ()
                collapsed.add(current.vertex)
                if current.vertex is merged.start or current.vertex is merged.end:
                    return ()
                return (self._rescore(current, merged),)
            if _same_edge(edge, target):
                return self._split_replacements(current, split_a, split_b)
            if current.vertex in updated:
                return (self._rescore(current, edge),)
            return (current,)

        self._candidates.replace_all(replace)

    def _split_replacements(
        self, current: DistanceToEdge, edge_a: CircuitEdge, edge_b: CircuitEdge
    ) -> Tuple[DistanceToEdge, ...]:
        return self._rescore(current, edge_a), self._rescore(current, edge_b)

    def _rescore(self, current: DistanceToEdge, edge: CircuitEdge) -> DistanceToEdge:
        v = current.vertex
        return DistanceToEdge(v, edge, edge.distance_increase(v) - self._baseline[v])

    def _update_baselines(self, updated: Set[CircuitVertex]) -> None:
        if len(self._edges) < 3:
            return
        prev = self._edges[-1]
        for edge in self._edges:
            v = edge.start
            if v in updated and v not in self._perimeter:
                self._baseline[v] = prev.length + edge.length - edge.end.distance_to(prev.start)
            prev = edge

    # ------------------------------------------------------------------
    #  Queries
    # ------------------------------------------------------------------
    def get_length(self) -> float:
        return self._length

    def get_length_with_next(self) -> float:
        """Length after the next candidate, or the current length once the circuit cannot improve."""
        nxt = self._candidates.peek()
        if nxt is None:
            return self._length
        if self.is_complete() and nxt.distance >= -THRESHOLD:
            return self._length
        return self._length + nxt.distance

    def find_next_vertex_and_edge(self) -> Tuple[Optional[CircuitVertex], Optional[CircuitEdge]]:
        nxt = self._candidates.peek()
        if nxt is None:
            return None, None
        return nxt.vertex, nxt.edge

    def get_attached_vertices(self) -> List[CircuitVertex]:
        return [e.start for e in self._edges]

    def get_attached_edges(self) -> List[CircuitEdge]:
        return list(self._edges)

    def get_unattached_vertices(self) -> Set[CircuitVertex]:
        return set(self._unattached)

    def get_perimeter_vertices(self) -> Set[CircuitVertex]:
        return set(self._perimeter)

    def get_closest_edges(self) -> Heap[DistanceToEdge]:
        return self._candidates

    def is_complete(self) -> bool:
        return bool(self._edges) and not self._unattached

    def delete(self) -> None:
        """Release the state; the circuit must not be used afterwards."""
        self._candidates.delete()
        self._edges = []
        self._unattached = set()
        self._perimeter = set()
        self._baseline = {}
        self.vertices = []

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(edges={len(self._edges)}, unattached={len(self._unattached)}, "
            f"length={self._length:.6f}, candidates={len(self._candidates)})"
        )


__all__ = ["HeapableCircuit"]
