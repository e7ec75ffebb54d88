"""Circuit states explored by the best-first search."""

from tsp_insertion.circuit.completed import CompletedCircuit
from tsp_insertion.circuit.heapable import HeapableCircuit
from tsp_insertion.circuit.limited import HeapableCircuitLimited

__all__ = ["HeapableCircuit", "HeapableCircuitLimited", "CompletedCircuit"]
