from __future__ import annotations

import math

import numpy as np
import pytest

from BnBTSP.solvers.base import INFEASIBLE
from BnBTSP.solvers.exact.agenda import PriorityAgenda
from BnBTSP.solvers.exact.search_state import SearchState


def _state(path, bound) -> SearchState:
    return SearchState(np.full((5, 5), INFEASIBLE), path, bound)


def test_empty_agenda():
    agenda = PriorityAgenda()
    assert agenda.is_empty()
    assert agenda.size() == 0
    assert agenda.peek_min_bound() == math.inf
    with pytest.raises(IndexError):
        agenda.pop_min()


def test_deeper_states_come_first_then_lower_bound():
    agenda = PriorityAgenda()
    shallow_cheap = _state([0], 1.0)
    deep_costly = _state([0, 1, 2], 9.0)
    deep_cheap = _state([0, 2, 1], 4.0)
    middle = _state([0, 3], 2.0)
    for state in (shallow_cheap, deep_costly, middle, deep_cheap):
        agenda.push(state)

    assert len(agenda) == 4
    assert [agenda.pop_min() for _ in range(4)] == [deep_cheap, deep_costly, middle, shallow_cheap]
    assert agenda.is_empty()


def test_peek_min_bound_tracks_live_states():
    agenda = PriorityAgenda()
    agenda.push(_state([0], 1.0))
    agenda.push(_state([0, 1], 3.0))
    agenda.push(_state([0, 2], 2.0))
    assert agenda.peek_min_bound() == 1.0

    assert agenda.pop_min().bound == 2.0
    assert agenda.peek_min_bound() == 1.0
    agenda.pop_min()
    agenda.pop_min()
    assert agenda.peek_min_bound() == math.inf


def test_duplicates_are_kept():
    agenda = PriorityAgenda()
    first = _state([0, 1], 2.0)
    second = _state([0, 1], 2.0)
    agenda.push(first)
    agenda.push(second)
    assert agenda.size() == 2
    assert agenda.pop_min() is first
    assert agenda.pop_min() is second


def test_side_heap_stays_proportional_to_live_states():
    agenda = PriorityAgenda()
    agenda.push(_state([0], 0.0))
    for depth in range(1, 50):
        # deep states keep popping first, so their side entries never reach the top
        state = agenda.pop_min()
        agenda.push(_state(list(state.path) + [depth], float(depth)))
        agenda.push(_state(list(state.path) + [depth + 100], float(depth) + 0.5))
        assert len(agenda._bounds) <= 2 * len(agenda)
    assert agenda.peek_min_bound() == 1.5

    while not agenda.is_empty():
        agenda.pop_min()
    assert agenda._bounds == []
    assert agenda.peek_min_bound() == math.inf
