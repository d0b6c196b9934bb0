from BnBTSP.config import SolverConfig
from BnBTSP.core import solve
from BnBTSP.errors import BnBTSPError, InvalidInput, NoFeasibleExpansion
from BnBTSP.problem import City, CityGraph, build_cost_matrix, generate_problem
from BnBTSP.solvers import (
    BaseSolver,
    BranchAndBoundSolver,
    SimpleNearestNeighborSolver,
    SOLVER_FAMILIES,
    SOLVER_REGISTRY,
    SOLVER_SPECS,
    SolveResult,
    get_solver,
)
from BnBTSP.utils.taxonomy import AlgorithmFamily, SearchPhase, Termination

__all__ = [
    "AlgorithmFamily",
    "BaseSolver",
    "BnBTSPError",
    "BranchAndBoundSolver",
    "City",
    "CityGraph",
    "InvalidInput",
    "NoFeasibleExpansion",
    "SearchPhase",
    "SimpleNearestNeighborSolver",
    "SolveResult",
    "SolverConfig",
    "SOLVER_FAMILIES",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "Termination",
    "build_cost_matrix",
    "generate_problem",
    "get_solver",
    "solve",
]
