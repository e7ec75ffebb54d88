"""Best-first search over circuit states.

States live in a min-heap keyed by ``get_length_with_next()``, i.e. the tour
length each state would reach with its own cheapest next step. The cheapest
state is advanced one step at a time; forks produced along the way join the
heap and compete with their parents. The first state popped that is complete
and cannot improve is the answer.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from tsp_insertion.circuit.completed import CompletedCircuit
from tsp_insertion.circuit.heapable import HeapableCircuit
from tsp_insertion.circuit.limited import HeapableCircuitLimited
from tsp_insertion.common.config import SolverConfig
from tsp_insertion.model.errors import CircuitDesyncError
from tsp_insertion.model.heap import Heap
from tsp_insertion.model.interfaces import CircuitVertex
from tsp_insertion.model2d import PerimeterBuilder2D, Vertex2D, deduplicate_vertices_2d
from tsp_insertion.model3d import PerimeterBuilder3D, Vertex3D, deduplicate_vertices_3d

logger = logging.getLogger(__name__)

Circuit = Union[HeapableCircuit, CompletedCircuit]


@dataclass
class SolveResult:
    circuit: Circuit
    iterations: int
    clones: int
    truncated: bool

    @property
    def length(self) -> float:
        return self.circuit.get_length()

    @property
    def tour(self) -> List[CircuitVertex]:
        return self.circuit.get_attached_vertices()


def _needs_work(circuit: Circuit) -> bool:
    return not circuit.is_complete() or circuit.get_length_with_next() < circuit.get_length()


def _is_stalled(circuit: Circuit) -> bool:
    return isinstance(circuit, HeapableCircuit) and len(circuit.get_closest_edges()) == 0


def _release(states: Heap[Circuit]) -> None:
    for state in states.values():
        state.delete()
    states.delete()


def find_shortest_path_heap(circuit: Circuit, *, max_clones: Optional[int] = None) -> SolveResult:
    """Run the best-first search from ``circuit`` and return the best complete state.

    ``max_clones`` caps the number of forks. Once reached, the cheapest state
    seen so far is finished greedily (forks it would produce are discarded) and
    the result is flagged as ``truncated``.

    A branch that raises :class:`CircuitDesyncError` is logged and dropped; the
    error propagates only if no other branch is left.
    """
    if max_clones is not None and max_clones < 0:
        raise ValueError("max_clones must be non-negative")

    circuit.prepare()
    circuit.build_perimeter()

    states: Heap[Circuit] = Heap(lambda c: c.get_length_with_next())
    iterations = 0
    clones = 0
    truncated = False
    current = circuit

    while _needs_work(current):
        if max_clones is not None and clones >= max_clones:
            truncated = True
            break

        failure: Optional[Exception] = None
        clone = None
        if _is_stalled(current):
            logger.error("Dropping stalled circuit %r: no candidates left", current)
            failure = RuntimeError(f"Circuit has no candidates left but is incomplete: {current!r}")
        else:
            try:
                clone = current.clone_and_update()
            except CircuitDesyncError as err:
                logger.error("Dropping desynchronized circuit %r: %s %s", current, err, err.context())
                failure = err

        if failure is not None:
            current.delete()
            nxt = states.pop()
            if nxt is None:
                states.delete()
                raise failure
            current = nxt
            continue

        states.push(current)
        if clone is not None:
            clones += 1
            states.push(clone)
        iterations += 1
        current = states.pop()

        if logger.isEnabledFor(logging.DEBUG) and iterations % 1000 == 0:
            logger.debug(
                "iteration %d: %d states, %d clones, best length with next %.6f",
                iterations,
                len(states) + 1,
                clones,
                current.get_length_with_next(),
            )

    _release(states)

    if truncated:
        logger.warning("Clone budget of %d reached after %d iterations; finishing greedily", max_clones, iterations)
        while _needs_work(current):
            if _is_stalled(current):
                raise RuntimeError(f"Circuit has no candidates left but is incomplete: {current!r}")
            discarded = current.clone_and_update()
            if discarded is not None:
                discarded.delete()
            iterations += 1

    logger.info(
        "Solved %d vertices: length %.6f after %d iterations, %d clones%s",
        len(current.get_attached_vertices()),
        current.get_length(),
        iterations,
        clones,
        " (truncated)" if truncated else "",
    )
    return SolveResult(circuit=current, iterations=iterations, clones=clones, truncated=truncated)


# ---------------------------------------------------------------------------
#  Convenience entry point
# ---------------------------------------------------------------------------
def to_vertices(points: Sequence[Sequence[float]]) -> List[Any]:
    """Convert coordinate tuples into :class:`Vertex2D` or :class:`Vertex3D` objects."""
    if len(points) == 0:
        raise ValueError("At least one point is required")
    dims = {len(p) for p in points}
    if len(dims) != 1:
        raise ValueError(f"Points must all have the same dimension, got {sorted(dims)}")
    dim = dims.pop()
    if dim not in (2, 3):
        raise ValueError(f"Points must be 2D or 3D, got {dim}D")
    for p in points:
        if not all(math.isfinite(float(c)) for c in p):
            raise ValueError(f"Non-finite coordinate in point {tuple(p)!r}")
    if dim == 2:
        return [Vertex2D(float(p[0]), float(p[1])) for p in points]
    return [Vertex3D(float(p[0]), float(p[1]), float(p[2])) for p in points]


def solve(points: Sequence[Sequence[float]], *, config: Optional[SolverConfig] = None) -> SolveResult:
    """Build a tour through ``points`` (all 2D or all 3D coordinate tuples)."""
    config = config or SolverConfig()
    vertices = to_vertices(points)
    is_2d = isinstance(vertices[0], Vertex2D)

    if config.dedupe:
        vertices = deduplicate_vertices_2d(vertices) if is_2d else deduplicate_vertices_3d(vertices)

    if len(vertices) <= 3:
        logger.info("Only %d distinct vertices; returning them as the tour", len(vertices))
        return SolveResult(circuit=CompletedCircuit(vertices), iterations=0, clones=0, truncated=False)

    builder = PerimeterBuilder2D() if is_2d else PerimeterBuilder3D()
    if config.variant == "limited":
        circuit: HeapableCircuit = HeapableCircuitLimited(vertices, builder, limit=config.limit)
    else:
        circuit = HeapableCircuit(vertices, builder)
    return find_shortest_path_heap(circuit, max_clones=config.max_clones)


__all__ = ["SolveResult", "find_shortest_path_heap", "solve", "to_vertices"]
