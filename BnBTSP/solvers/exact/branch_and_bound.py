from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from BnBTSP.config import SolverConfig
from BnBTSP.errors import NoFeasibleExpansion
from BnBTSP.solvers.base import (
    BaseSolver,
    SolveResult,
    as_cost_matrix,
    budget_exhausted,
    compute_cycle_cost,
    current_time,
)
from BnBTSP.solvers.exact.agenda import PriorityAgenda
from BnBTSP.solvers.exact.reduction import enforce_zero, initial_reduce
from BnBTSP.solvers.exact.search_state import SearchState
from BnBTSP.solvers.heuristics.simple_nearest_neighbor import build_greedy_tour
from BnBTSP.utils.taxonomy import AlgorithmFamily, SearchPhase, Termination

logger = logging.getLogger(__name__)


@dataclass
class _SearchContext:
    """Mutable bookkeeping for one ``solve`` call."""

    best_route: List[int]
    best_cost: float
    greedy_cost: float
    root_bound: float = 0.0
    phase: SearchPhase = SearchPhase.READY
    iterations: int = 0
    nodes_explored: int = 0
    states_created: int = 1
    states_pruned: int = 0
    dead_ends: int = 0
    incumbent_updates: int = 0
    peak_agenda_size: int = 0

    def metadata(self) -> dict:
        return {
            "phase": self.phase.value,
            "iterations": self.iterations,
            "nodes_explored": self.nodes_explored,
            "states_created": self.states_created,
            "states_pruned": self.states_pruned,
            "dead_ends": self.dead_ends,
            "incumbent_updates": self.incumbent_updates,
            "greedy_cost": self.greedy_cost,
            "root_bound": self.root_bound,
        }


class BranchAndBoundSolver(BaseSolver):
    """Anytime branch and bound over reduced cost matrices.

    The incumbent is seeded with the nearest-neighbour tour, so a valid
    answer exists from the first iteration on. The search stops when the
    agenda runs dry, when no live state can beat the incumbent, or when the
    time budget runs out; only the first two prove optimality.
    """

    name = "branch_and_bound"
    family = AlgorithmFamily.EXACT

    def __init__(self, config: SolverConfig | None = None):
        self.config = (config or SolverConfig()).validate()
        self.last_phase = SearchPhase.READY
        self._best_cost: float | None = None

    def cost_of_best(self) -> float:
        """Cost of the most recent incumbent, or -1.0 before any solve."""
        return -1.0 if self._best_cost is None else self._best_cost

    def solve(self, graph: np.ndarray, time_limit: float | None = None) -> SolveResult:
        config = self.config if time_limit is None else self.config.with_budget(time_limit).validate()
        dist_matrix = as_cost_matrix(graph)
        start_time = current_time()
        n = dist_matrix.shape[0]

        greedy_route, greedy_cost = build_greedy_tour(dist_matrix)
        ctx = _SearchContext(best_route=greedy_route, best_cost=greedy_cost, greedy_cost=greedy_cost)

        reduced = dist_matrix.copy()
        ctx.root_bound = initial_reduce(reduced) + enforce_zero(reduced)
        agenda = PriorityAgenda()
        agenda.push(SearchState.root(reduced, ctx.root_bound))
        ctx.peak_agenda_size = len(agenda)

        logger.info(
            "Branch and bound on %d cities: greedy cost %.6g, root bound %.6g, budget %.3gs",
            n,
            greedy_cost,
            ctx.root_bound,
            config.time_budget,
        )

        if n == 1:
            ctx.phase = SearchPhase.DONE
        else:
            ctx.phase = SearchPhase.SEARCHING
            self._search(dist_matrix, agenda, ctx, start_time, config)

        self.last_phase = ctx.phase
        self._best_cost = ctx.best_cost
        elapsed = current_time() - start_time
        terminated_by = Termination.TIMED_OUT if ctx.phase is SearchPhase.TIMED_OUT else Termination.EXHAUSTED
        logger.info(
            "Branch and bound %s after %.3fs: cost %.6g, %d nodes explored, peak agenda %d",
            terminated_by.value,
            elapsed,
            ctx.best_cost,
            ctx.nodes_explored,
            ctx.peak_agenda_size,
        )
        return SolveResult(
            name=self.name,
            route=list(ctx.best_route),
            cost=ctx.best_cost,
            elapsed=elapsed,
            peak_agenda_size=ctx.peak_agenda_size,
            terminated_by=terminated_by,
            metadata=ctx.metadata(),
        )

    def _search(
        self,
        dist_matrix: np.ndarray,
        agenda: PriorityAgenda,
        ctx: _SearchContext,
        start_time: float,
        config: SolverConfig,
    ) -> None:
        while True:
            if budget_exhausted(start_time, config.time_budget):
                ctx.phase = SearchPhase.TIMED_OUT
                return
            if agenda.is_empty() or agenda.peek_min_bound() >= ctx.best_cost:
                ctx.phase = SearchPhase.DONE
                return

            ctx.iterations += 1
            if ctx.iterations % config.progress_interval == 0:
                logger.debug(
                    "iteration %d: agenda %d, best %.6g, explored %d, pruned %d",
                    ctx.iterations,
                    len(agenda),
                    ctx.best_cost,
                    ctx.nodes_explored,
                    ctx.states_pruned,
                )

            state = agenda.pop_min()
            if state.bound >= ctx.best_cost:
                ctx.states_pruned += 1
                continue
            self._expand(state, dist_matrix, agenda, ctx)

    def _expand(
        self,
        state: SearchState,
        dist_matrix: np.ndarray,
        agenda: PriorityAgenda,
        ctx: _SearchContext,
    ) -> None:
        try:
            children = state.expand()
        except NoFeasibleExpansion as exc:
            ctx.dead_ends += 1
            logger.debug("Dropping dead branch: %s", exc)
            return

        ctx.nodes_explored += 1
        for child in children:
            ctx.states_created += 1
            if child.bound >= ctx.best_cost:
                ctx.states_pruned += 1
                continue
            if child.is_complete():
                cost = compute_cycle_cost(dist_matrix, child.path)
                if cost < ctx.best_cost:
                    logger.debug("New incumbent %.6g (was %.6g): %s", cost, ctx.best_cost, list(child.path))
                    ctx.best_cost = cost
                    ctx.best_route = list(child.path)
                    ctx.incumbent_updates += 1
                continue
            agenda.push(child)
            ctx.peak_agenda_size = max(ctx.peak_agenda_size, len(agenda))


__all__ = ["BranchAndBoundSolver"]
