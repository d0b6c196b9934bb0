from __future__ import annotations

import itertools

import numpy as np
import pytest

from BnBTSP.problem import CityGraph
from BnBTSP.solvers.base import compute_cycle_cost


def brute_force_cost(dist_matrix: np.ndarray) -> float:
    n = dist_matrix.shape[0]
    if n == 1:
        return 0.0
    return min(compute_cycle_cost(dist_matrix, (0,) + perm) for perm in itertools.permutations(range(1, n)))


@pytest.fixture
def unit_square() -> CityGraph:
    return CityGraph.from_coordinates([(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)])


@pytest.fixture
def asymmetric_matrix() -> np.ndarray:
    return np.array(
        [
            [0.0, 3.0, 93.0, 13.0, 33.0],
            [4.0, 0.0, 77.0, 42.0, 21.0],
            [45.0, 17.0, 0.0, 36.0, 16.0],
            [39.0, 90.0, 80.0, 0.0, 56.0],
            [28.0, 46.0, 88.0, 33.0, 0.0],
        ]
    )


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
