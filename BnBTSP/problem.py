from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

import numpy as np

from BnBTSP.config import DEFAULT_PROBLEM_SIZE
from BnBTSP.errors import InvalidInput
from BnBTSP.solvers.base import INFEASIBLE, as_cost_matrix

CostFunction = Callable[[int, int], float]


@dataclass(frozen=True)
class City:
    x: float
    y: float

    def cost_to_get_to(self, other: "City") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


class CityGraph:
    """A fixed, ordered set of cities with Euclidean travel costs."""

    def __init__(self, cities: Sequence[City]):
        self._cities: Tuple[City, ...] = tuple(cities)

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[Sequence[float]] | np.ndarray) -> "CityGraph":
        coords = np.asarray(coordinates, dtype=float)
        if coords.size and (coords.ndim != 2 or coords.shape[1] != 2):
            raise InvalidInput(f"Coordinates must have shape (n, 2), got {coords.shape}")
        return cls([City(float(x), float(y)) for x, y in coords.reshape(-1, 2)])

    def __len__(self) -> int:
        return len(self._cities)

    def __getitem__(self, index: int) -> City:
        return self._cities[index]

    @property
    def cities(self) -> Tuple[City, ...]:
        return self._cities

    def coordinates(self) -> np.ndarray:
        return np.array([(c.x, c.y) for c in self._cities], dtype=float).reshape(-1, 2)

    def cost(self, i: int, j: int) -> float:
        if i == j:
            return INFEASIBLE
        return self._cities[i].cost_to_get_to(self._cities[j])

    def cost_matrix(self) -> np.ndarray:
        coords = self.coordinates()
        diff = coords[:, None, :] - coords[None, :, :]
        dist_matrix = np.linalg.norm(diff, axis=-1)
        np.fill_diagonal(dist_matrix, INFEASIBLE)
        return dist_matrix


def generate_problem(size: int = DEFAULT_PROBLEM_SIZE, seed: Optional[int] = None, scale: float = 1.0) -> CityGraph:
    """Place ``size`` cities uniformly at random in ``[0, scale) x [0, scale)``.

    A fixed seed regenerates the same problem; ``None`` draws fresh entropy.
    """
    if size < 1:
        raise InvalidInput(f"A problem needs at least one city, got size={size}")
    rng = np.random.default_rng(seed)
    coordinates = rng.random((size, 2)) * scale
    return CityGraph.from_coordinates(coordinates)


def build_cost_matrix(source: Any, n: Optional[int] = None) -> np.ndarray:
    """Turn any supported cost source into a validated cost matrix.

    Accepted sources are a ``CityGraph``, a problem dict carrying either
    ``distance_matrix`` or ``coordinates``, a callable ``cost(i, j)`` together
    with ``n``, or anything numpy can read as a square matrix.
    """
    if isinstance(source, CityGraph):
        if len(source) == 0:
            raise InvalidInput("A problem needs at least one city")
        return as_cost_matrix(source.cost_matrix())
    if isinstance(source, dict):
        return as_cost_matrix(_matrix_from_problem_data(source))
    if callable(source):
        if n is None:
            raise InvalidInput("A cost function needs an explicit number of cities")
        return as_cost_matrix(_matrix_from_function(source, n))
    return as_cost_matrix(source)


def _matrix_from_problem_data(problem_data: Dict[str, Any]) -> np.ndarray:
    if problem_data.get("distance_matrix") is not None:
        return np.asarray(problem_data["distance_matrix"], dtype=float)
    if problem_data.get("coordinates") is None:
        raise InvalidInput("Problem data must contain either 'distance_matrix' or 'coordinates'.")
    return CityGraph.from_coordinates(problem_data["coordinates"]).cost_matrix()


def _matrix_from_function(cost: CostFunction, n: int) -> np.ndarray:
    if n < 1:
        raise InvalidInput(f"A problem needs at least one city, got n={n}")
    dist_matrix = np.full((n, n), INFEASIBLE)
    for i in range(n):
        for j in range(n):
            if i != j:
                dist_matrix[i, j] = float(cost(i, j))
    return dist_matrix


__all__ = ["City", "CityGraph", "CostFunction", "build_cost_matrix", "generate_problem"]
