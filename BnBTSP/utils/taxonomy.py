from __future__ import annotations

from enum import Enum


class AlgorithmFamily(str, Enum):
    EXACT = "exact"
    HEURISTIC = "heuristic"


class SearchPhase(str, Enum):
    """Lifecycle of a single branch-and-bound run."""

    READY = "ready"
    SEARCHING = "searching"
    DONE = "done"
    TIMED_OUT = "timed_out"


class Termination(str, Enum):
    EXHAUSTED = "exhausted"
    TIMED_OUT = "timed_out"


__all__ = ["AlgorithmFamily", "SearchPhase", "Termination"]
