from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Type

import numpy as np

from BnBTSP.errors import InvalidInput
from BnBTSP.utils.taxonomy import AlgorithmFamily, Termination

INFEASIBLE = float("inf")


@dataclass
class SolveResult:
    """Container capturing the outcome of running a TSP solver."""

    name: str
    route: List[int]
    cost: float
    elapsed: float
    peak_agenda_size: int
    terminated_by: Termination
    metadata: Dict[str, Any] = field(default_factory=dict)


def current_time() -> float:
    return time.perf_counter()


def remaining_budget(start_time: float, time_limit: float) -> float:
    return time_limit - (current_time() - start_time)


def budget_exhausted(start_time: float, time_limit: float) -> bool:
    return remaining_budget(start_time, time_limit) <= 0


def compute_cycle_cost(dist_matrix: np.ndarray, cycle: Sequence[int]) -> float:
    """Compute tour cost (including return leg)."""
    if len(cycle) <= 1:
        return 0.0
    cost = 0.0
    for i in range(len(cycle)):
        a = cycle[i]
        b = cycle[(i + 1) % len(cycle)]
        cost += float(dist_matrix[a, b])
    return cost


def as_cost_matrix(graph: np.ndarray) -> np.ndarray:
    """Validate a square cost matrix and return a float copy with an INFEASIBLE diagonal."""
    dist_matrix = np.array(graph, dtype=float)
    if dist_matrix.ndim != 2 or dist_matrix.shape[0] != dist_matrix.shape[1]:
        raise InvalidInput(f"Cost matrix must be square, got shape {dist_matrix.shape}")
    if dist_matrix.shape[0] == 0:
        raise InvalidInput("A problem needs at least one city")
    if np.isnan(dist_matrix).any():
        raise InvalidInput("Cost matrix contains NaN entries")
    off_diagonal = ~np.eye(dist_matrix.shape[0], dtype=bool)
    if (dist_matrix[off_diagonal] < 0).any():
        raise InvalidInput("Cost matrix contains negative costs")
    np.fill_diagonal(dist_matrix, INFEASIBLE)
    return dist_matrix


@dataclass(frozen=True)
class SolverSpec:
    """Metadata describing a solver implementation."""

    name: str
    cls: Type["BaseSolver"]
    family: AlgorithmFamily


class BaseSolver:
    """Common interface for BnBTSP solvers."""

    name: str
    family: AlgorithmFamily

    def solve(self, graph: np.ndarray, time_limit: float = 60.0) -> SolveResult:  # noqa: D401
        """Solve a TSP instance represented as a cost matrix."""
        raise NotImplementedError

    def __call__(self, graph: np.ndarray, time_limit: float = 60.0) -> SolveResult:
        return self.solve(graph, time_limit=time_limit)


__all__ = [
    "INFEASIBLE",
    "AlgorithmFamily",
    "BaseSolver",
    "SolveResult",
    "SolverSpec",
    "as_cost_matrix",
    "budget_exhausted",
    "compute_cycle_cost",
    "current_time",
    "remaining_budget",
]
