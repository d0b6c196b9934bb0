from __future__ import annotations


class BnBTSPError(Exception):
    """Base class for errors raised by BnBTSP."""


class InvalidInput(BnBTSPError, ValueError):
    """Raised before any search starts when the problem or budget is malformed."""


class NoFeasibleExpansion(BnBTSPError):
    """Raised when a partial tour has no finite outgoing edge left.

    The engine treats this as a dead branch and drops the state.
    """

    def __init__(self, path: list[int]):
        self.path = list(path)
        super().__init__(f"No feasible outgoing edge from city {self.path[-1]} (path={self.path})")


__all__ = ["BnBTSPError", "InvalidInput", "NoFeasibleExpansion"]
