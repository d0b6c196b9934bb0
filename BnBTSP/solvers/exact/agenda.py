from __future__ import annotations

import heapq
import itertools
from typing import List, Set, Tuple

from BnBTSP.solvers.exact.search_state import SearchState


class PriorityAgenda:
    """Min-priority queue of live search states.

    Deeper partial tours come first, ties go to the lower bound, and the
    insertion order makes the ordering total. A second heap keyed by bound
    alone answers ``peek_min_bound``; entries popped from the main heap are
    dropped from it lazily.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[int, float, int, SearchState]] = []
        self._bounds: List[Tuple[float, int]] = []
        self._popped: Set[int] = set()
        self._counter = itertools.count()

    def push(self, state: SearchState) -> None:
        entry_id = next(self._counter)
        heapq.heappush(self._heap, (-state.depth, state.bound, entry_id, state))
        heapq.heappush(self._bounds, (state.bound, entry_id))

    def pop_min(self) -> SearchState:
        if not self._heap:
            raise IndexError("pop from an empty agenda")
        _, _, entry_id, state = heapq.heappop(self._heap)
        self._popped.add(entry_id)
        if len(self._popped) > len(self._heap):
            self._compact()
        return state

    def peek_min_bound(self) -> float:
        while self._bounds and self._bounds[0][1] in self._popped:
            _, entry_id = heapq.heappop(self._bounds)
            self._popped.discard(entry_id)
        if not self._bounds:
            return float("inf")
        return self._bounds[0][0]

    def _compact(self) -> None:
        self._bounds = [(bound, entry_id) for bound, entry_id in self._bounds if entry_id not in self._popped]
        heapq.heapify(self._bounds)
        self._popped.clear()

    def is_empty(self) -> bool:
        return not self._heap

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)


__all__ = ["PriorityAgenda"]
