"""Best-first incremental insertion heuristics for the Traveling Salesman Problem."""

from tsp_insertion.circuit import CompletedCircuit, HeapableCircuit, HeapableCircuitLimited
from tsp_insertion.common.config import SolverConfig
from tsp_insertion.model import CircuitDesyncError, DistanceToEdge, Heap
from tsp_insertion.model2d import Edge2D, PerimeterBuilder2D, Vertex2D
from tsp_insertion.model3d import Edge3D, PerimeterBuilder3D, Vertex3D
from tsp_insertion.solver import SolveResult, find_shortest_path_heap, solve

__all__ = [
    "CompletedCircuit",
    "HeapableCircuit",
    "HeapableCircuitLimited",
    "SolverConfig",
    "CircuitDesyncError",
    "DistanceToEdge",
    "Heap",
    "Vertex2D",
    "Edge2D",
    "PerimeterBuilder2D",
    "Vertex3D",
    "Edge3D",
    "PerimeterBuilder3D",
    "SolveResult",
    "find_shortest_path_heap",
    "solve",
]
