from __future__ import annotations

from typing import List, Tuple

import numpy as np

from BnBTSP.solvers.base import (
    BaseSolver,
    SolveResult,
    as_cost_matrix,
    compute_cycle_cost,
    current_time,
)
from BnBTSP.utils.taxonomy import AlgorithmFamily, Termination


def build_greedy_tour(dist_matrix: np.ndarray) -> Tuple[List[int], float]:
    """Nearest-neighbour tour from city 0; ties go to the lowest index."""
    n = dist_matrix.shape[0]
    visited = [0]
    unvisited = np.ones(n, dtype=bool)
    unvisited[0] = False

    for _ in range(1, n):
        last = visited[-1]
        candidates = np.flatnonzero(unvisited)
        # argmin keeps the first minimum, so an all-inf row still picks an unvisited city
        next_city = int(candidates[np.argmin(dist_matrix[last, candidates])])
        visited.append(next_city)
        unvisited[next_city] = False

    return visited, compute_cycle_cost(dist_matrix, visited)


class SimpleNearestNeighborSolver(BaseSolver):
    name = "simple_nearest_neighbor"
    family = AlgorithmFamily.HEURISTIC

    def solve(self, graph: np.ndarray, time_limit: float = 60.0) -> SolveResult:
        dist_matrix = as_cost_matrix(graph)
        start_time = current_time()
        route, cost = build_greedy_tour(dist_matrix)
        return SolveResult(
            name=self.name,
            route=route,
            cost=cost,
            elapsed=current_time() - start_time,
            peak_agenda_size=0,
            terminated_by=Termination.EXHAUSTED,
            metadata={"nodes_visited": len(route)},
        )


__all__ = ["SimpleNearestNeighborSolver", "build_greedy_tour"]
