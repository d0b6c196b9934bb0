from __future__ import annotations

import logging

import numpy as np
import pytest

from BnBTSP.config import SolverConfig
from BnBTSP.errors import InvalidInput
from BnBTSP.problem import generate_problem
from BnBTSP.solvers import BranchAndBoundSolver, get_solver
from BnBTSP.solvers.base import INFEASIBLE, compute_cycle_cost
from BnBTSP.solvers.heuristics import build_greedy_tour
from BnBTSP.utils.taxonomy import SearchPhase, Termination

from conftest import brute_force_cost


def test_unit_square_is_solved_exactly(unit_square):
    result = BranchAndBoundSolver().solve(unit_square.cost_matrix(), time_limit=10.0)
    assert result.cost == pytest.approx(4.0)
    assert result.terminated_by is Termination.EXHAUSTED
    assert result.route[0] == 0
    assert result.route in ([0, 1, 2, 3], [0, 3, 2, 1])


def test_single_city():
    solver = BranchAndBoundSolver()
    result = solver.solve(np.zeros((1, 1)), time_limit=1.0)
    assert result.route == [0]
    assert result.cost == 0.0
    assert result.terminated_by is Termination.EXHAUSTED
    assert solver.last_phase is SearchPhase.DONE


def test_two_cities_asymmetric():
    result = BranchAndBoundSolver().solve(np.array([[0.0, 2.0], [7.0, 0.0]]), time_limit=1.0)
    assert result.route == [0, 1]
    assert result.cost == 9.0


def test_zero_budget_returns_greedy_tour(asymmetric_matrix):
    solver = BranchAndBoundSolver()
    result = solver.solve(asymmetric_matrix, time_limit=0.0)
    route, cost = build_greedy_tour(np.array(asymmetric_matrix, dtype=float))
    assert result.terminated_by is Termination.TIMED_OUT
    assert solver.last_phase is SearchPhase.TIMED_OUT
    assert result.route == route
    assert result.cost == cost
    assert result.metadata["nodes_explored"] == 0


def test_asymmetric_optimum(asymmetric_matrix):
    result = BranchAndBoundSolver().solve(asymmetric_matrix, time_limit=10.0)
    assert result.terminated_by is Termination.EXHAUSTED
    assert result.cost == pytest.approx(brute_force_cost(np.array(asymmetric_matrix, dtype=float)))
    assert result.cost == pytest.approx(compute_cycle_cost(asymmetric_matrix, result.route))


@pytest.mark.parametrize("n", [2, 3, 4, 5, 6])
@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_matches_brute_force_on_small_instances(n, seed):
    dist = generate_problem(n, seed=seed).cost_matrix()
    result = BranchAndBoundSolver().solve(dist, time_limit=30.0)
    assert sorted(result.route) == list(range(n))
    assert result.cost == pytest.approx(brute_force_cost(dist))
    assert result.terminated_by is Termination.EXHAUSTED


@pytest.mark.parametrize("seed", [10, 11, 12])
def test_random_asymmetric_matches_brute_force(seed):
    rng = np.random.default_rng(seed)
    dist = rng.integers(1, 100, size=(6, 6)).astype(float)
    result = BranchAndBoundSolver().solve(dist, time_limit=30.0)
    np.fill_diagonal(dist, INFEASIBLE)
    assert result.cost == pytest.approx(brute_force_cost(dist))


def test_never_worse_than_greedy_and_always_a_permutation():
    dist = generate_problem(14, seed=99).cost_matrix()
    _, greedy_cost = build_greedy_tour(dist)
    result = BranchAndBoundSolver().solve(dist, time_limit=0.5)
    assert sorted(result.route) == list(range(14))
    assert result.cost <= greedy_cost
    assert result.cost == pytest.approx(compute_cycle_cost(dist, result.route))
    assert result.metadata["greedy_cost"] == greedy_cost
    assert result.metadata["root_bound"] <= result.cost


def test_respects_time_budget():
    dist = generate_problem(40, seed=5).cost_matrix()
    budget = 0.3
    result = BranchAndBoundSolver().solve(dist, time_limit=budget)
    assert result.terminated_by is Termination.TIMED_OUT
    assert result.elapsed < budget + 1.0
    assert sorted(result.route) == list(range(40))


def test_peak_agenda_size_is_reported():
    dist = generate_problem(8, seed=3).cost_matrix()
    result = BranchAndBoundSolver().solve(dist, time_limit=30.0)
    assert result.peak_agenda_size >= 1
    assert result.metadata["states_created"] >= result.metadata["nodes_explored"]


def test_dead_branches_are_dropped():
    # city 2 can only be reached from city 1 and only leave towards 3
    dist = np.array(
        [
            [0.0, 1.0, INFEASIBLE, 4.0],
            [1.0, 0.0, 2.0, 1.0],
            [INFEASIBLE, INFEASIBLE, 0.0, 3.0],
            [4.0, 1.0, INFEASIBLE, 0.0],
        ]
    )
    result = BranchAndBoundSolver().solve(dist, time_limit=10.0)
    assert result.route == [0, 1, 2, 3]
    assert result.cost == pytest.approx(10.0)
    assert result.terminated_by is Termination.EXHAUSTED


def test_cost_of_best_before_and_after_solve(unit_square):
    solver = BranchAndBoundSolver()
    assert solver.cost_of_best() == -1.0
    solver.solve(unit_square.cost_matrix(), time_limit=5.0)
    assert solver.cost_of_best() == pytest.approx(4.0)


def test_invalid_budget_is_rejected(unit_square):
    with pytest.raises(InvalidInput):
        BranchAndBoundSolver().solve(unit_square.cost_matrix(), time_limit=-1.0)
    with pytest.raises(InvalidInput):
        BranchAndBoundSolver(SolverConfig(progress_interval=0))


def test_progress_is_logged(caplog):
    dist = generate_problem(9, seed=4).cost_matrix()
    solver = BranchAndBoundSolver(SolverConfig(time_budget=30.0, progress_interval=1))
    with caplog.at_level(logging.DEBUG, logger="BnBTSP.solvers.exact.branch_and_bound"):
        solver.solve(dist)
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Branch and bound on 9 cities") for message in messages)
    assert any(message.startswith("iteration 1:") for message in messages)


def test_registry_lookup():
    assert isinstance(get_solver("branch_and_bound"), BranchAndBoundSolver)
    with pytest.raises(KeyError):
        get_solver("held_karp")


def test_registry_specs_match_solver_classes():
    from BnBTSP.solvers import SOLVER_FAMILIES, SOLVER_SPECS

    assert set(SOLVER_SPECS) == {"branch_and_bound", "simple_nearest_neighbor"}
    for name, spec in SOLVER_SPECS.items():
        assert spec.cls.name == name
        assert SOLVER_FAMILIES[name] is spec.cls.family
