from __future__ import annotations

from typing import Any, Dict, List, Sequence

from tsp_insertion.model.interfaces import CircuitEdge, CircuitVertex


class CircuitDesyncError(RuntimeError):
    """A candidate refers to an edge that is no longer part of the circuit.

    This means the candidate heap and the edge list have drifted apart, which is
    an internal fault. The offending vertex, edge and a snapshot of the edge list
    are kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        vertex: CircuitVertex,
        edge: CircuitEdge,
        edges: Sequence[CircuitEdge],
    ) -> None:
        super().__init__(message)
        self.vertex = vertex
        self.edge = edge
        self.edges: List[CircuitEdge] = list(edges)

    def context(self) -> Dict[str, Any]:
        return {
            "vertex": repr(self.vertex),
            "edge": repr(self.edge),
            "edges": [repr(e) for e in self.edges],
        }


__all__ = ["CircuitDesyncError"]
