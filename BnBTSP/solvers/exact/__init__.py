from BnBTSP.solvers.exact.agenda import PriorityAgenda
from BnBTSP.solvers.exact.branch_and_bound import BranchAndBoundSolver
from BnBTSP.solvers.exact.search_state import ROOT_CITY, SearchState

__all__ = [
    "BranchAndBoundSolver",
    "PriorityAgenda",
    "ROOT_CITY",
    "SearchState",
]
