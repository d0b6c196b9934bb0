from __future__ import annotations

import logging
import time
from typing import Any, Optional

from BnBTSP.config import DEFAULT_TIME_BUDGET, SolverConfig
from BnBTSP.problem import build_cost_matrix
from BnBTSP.solvers import BranchAndBoundSolver, SolveResult

logger = logging.getLogger(__name__)


def solve(
    cost_source: Any,
    time_budget: float = DEFAULT_TIME_BUDGET,
    *,
    n: Optional[int] = None,
    config: SolverConfig | None = None,
) -> SolveResult:
    """Find a minimum-cost tour within ``time_budget`` seconds.

    ``cost_source`` may be a cost matrix, a ``CityGraph``, a problem dict or a
    callable ``cost(i, j)`` (which needs ``n``). Invalid input raises
    ``InvalidInput`` before any search starts; otherwise a result is always
    returned, timed out or not.
    """
    start_time = time.perf_counter()
    base_config = config or SolverConfig()
    solver_config = base_config.with_budget(time_budget).validate()
    dist_matrix = build_cost_matrix(cost_source, n=n)
    logger.debug("Built %dx%d cost matrix", *dist_matrix.shape)

    result = BranchAndBoundSolver(solver_config).solve(dist_matrix)
    result.metadata["wallclock_total"] = time.perf_counter() - start_time
    return result


__all__ = ["solve"]
