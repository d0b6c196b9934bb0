"""Reduced-cost-matrix operations used to lower-bound partial tours.

All functions mutate ``matrix`` in place. INFEASIBLE (``inf``) entries are
never changed by a reduction.
"""

from __future__ import annotations

import numpy as np

from BnBTSP.solvers.base import INFEASIBLE


def initial_reduce(matrix: np.ndarray) -> float:
    finite = np.isfinite(matrix)
    if not finite.any():
        return 0.0
    delta = float(matrix[finite].min())
    matrix[finite] -= delta
    return delta


def enforce_zero(matrix: np.ndarray) -> float:
    if matrix.size == 0:
        return 0.0
    delta = 0.0

    row_min = matrix.min(axis=1)
    rows = np.isfinite(row_min) & (row_min > 0)
    if rows.any():
        matrix[rows] -= row_min[rows][:, None]
        delta += float(row_min[rows].sum())

    col_min = matrix.min(axis=0)
    cols = np.isfinite(col_min) & (col_min > 0)
    if cols.any():
        matrix[:, cols] -= col_min[cols][None, :]
        delta += float(col_min[cols].sum())

    return delta


def mask_after_commit(matrix: np.ndarray, from_index: int, to_index: int, root_index: int = 0) -> None:
    matrix[from_index, :] = INFEASIBLE
    matrix[:, to_index] = INFEASIBLE
    # no early return to the start city
    matrix[to_index, root_index] = INFEASIBLE


def has_zero_coverage(matrix: np.ndarray) -> bool:
    """True when every row and column holding a finite entry holds a zero."""
    finite = np.isfinite(matrix)
    zeros = finite & (matrix == 0)
    rows_ok = zeros.any(axis=1) | ~finite.any(axis=1)
    cols_ok = zeros.any(axis=0) | ~finite.any(axis=0)
    return bool(rows_ok.all() and cols_ok.all())


__all__ = ["enforce_zero", "has_zero_coverage", "initial_reduce", "mask_after_commit"]
