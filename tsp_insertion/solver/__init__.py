from tsp_insertion.solver.heap_solver import SolveResult, find_shortest_path_heap, solve, to_vertices

__all__ = ["SolveResult", "find_shortest_path_heap", "solve", "to_vertices"]
