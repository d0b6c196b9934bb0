from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from BnBTSP.errors import NoFeasibleExpansion
from BnBTSP.solvers.exact.reduction import enforce_zero, mask_after_commit

ROOT_CITY = 0


class SearchState:
    """Snapshot of a partial tour: its reduced cost matrix, path and lower bound.

    Each state owns a private copy of its matrix, frozen read-only once the
    state is built, so states can be reordered freely on the agenda.
    """

    __slots__ = ("_matrix", "_path", "_bound")

    def __init__(self, matrix: np.ndarray, path: Sequence[int], bound: float):
        self._matrix = matrix
        self._matrix.setflags(write=False)
        self._path: Tuple[int, ...] = tuple(path)
        self._bound = float(bound)

    @classmethod
    def root(cls, reduced_matrix: np.ndarray, bound: float, root_city: int = ROOT_CITY) -> "SearchState":
        return cls(np.array(reduced_matrix, dtype=float), [root_city], bound)

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def path(self) -> Tuple[int, ...]:
        return self._path

    @property
    def bound(self) -> float:
        return self._bound

    @property
    def depth(self) -> int:
        return len(self._path)

    @property
    def n_cities(self) -> int:
        return self._matrix.shape[0]

    @property
    def last_city(self) -> int:
        return self._path[-1]

    def is_complete(self) -> bool:
        return len(self._path) == self.n_cities

    def child(self, next_city: int) -> "SearchState":
        """Commit the edge ``last_city -> next_city`` on a fresh copy of the matrix."""
        last = self.last_city
        matrix = self._matrix.copy()
        bound = self._bound + float(matrix[last, next_city])
        mask_after_commit(matrix, last, next_city, self._path[0])
        bound += enforce_zero(matrix)
        return SearchState(matrix, self._path + (next_city,), bound)

    def expand(self) -> List["SearchState"]:
        if self.is_complete():
            return []
        candidates = np.flatnonzero(np.isfinite(self._matrix[self.last_city]))
        if candidates.size == 0:
            raise NoFeasibleExpansion(list(self._path))
        return [self.child(int(j)) for j in candidates]

    def __repr__(self) -> str:
        return f"SearchState(path={list(self._path)}, bound={self._bound:.6g})"


__all__ = ["ROOT_CITY", "SearchState"]
