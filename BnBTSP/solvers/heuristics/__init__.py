from BnBTSP.solvers.heuristics.simple_nearest_neighbor import SimpleNearestNeighborSolver, build_greedy_tour

__all__ = [
    "SimpleNearestNeighborSolver",
    "build_greedy_tour",
]
