from __future__ import annotations

from BnBTSP.solvers.base import BaseSolver, SolveResult, SolverSpec
from BnBTSP.solvers.exact import BranchAndBoundSolver
from BnBTSP.solvers.heuristics import SimpleNearestNeighborSolver
from BnBTSP.utils.taxonomy import AlgorithmFamily

SOLVER_SPECS: dict[str, SolverSpec] = {
    BranchAndBoundSolver.name: SolverSpec(
        name=BranchAndBoundSolver.name,
        cls=BranchAndBoundSolver,
        family=BranchAndBoundSolver.family,
    ),
    SimpleNearestNeighborSolver.name: SolverSpec(
        name=SimpleNearestNeighborSolver.name,
        cls=SimpleNearestNeighborSolver,
        family=SimpleNearestNeighborSolver.family,
    ),
}

SOLVER_REGISTRY: dict[str, type[BaseSolver]] = {name: spec.cls for name, spec in SOLVER_SPECS.items()}
SOLVER_FAMILIES: dict[str, AlgorithmFamily] = {name: spec.family for name, spec in SOLVER_SPECS.items()}


def get_solver(name: str) -> BaseSolver:
    solver_cls = SOLVER_REGISTRY.get(name)
    if solver_cls is None:
        raise KeyError(f"Unknown solver: {name}")
    return solver_cls()


__all__ = [
    "SolveResult",
    "BaseSolver",
    "SOLVER_FAMILIES",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "AlgorithmFamily",
    "get_solver",
    "BranchAndBoundSolver",
    "SimpleNearestNeighborSolver",
]
