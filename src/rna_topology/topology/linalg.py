from __future__ import annotations
from typing import List, Tuple

import numpy as np

from rna_topology.errors import InvalidInputError

# Absolute epsilon below which an entry counts as zero.
ZERO_TOLERANCE = 1e-10


def _as_matrix(matrix) -> np.ndarray:
    arr = np.array(matrix, dtype=np.float64, copy=True)
    if arr.ndim != 2:
        raise InvalidInputError(f"Expected a 2-D matrix, got an array with {arr.ndim} dimension(s).")
    return arr


def row_echelon(matrix, tol: float = ZERO_TOLERANCE) -> Tuple[np.ndarray, List[int]]:
    """
    Row echelon form by Gaussian elimination with partial pivoting.

    At every step the row with the largest absolute entry in the current
    column becomes the pivot row. Only rows with a nonzero entry below the
    pivot are updated, as one vectorised outer-product step.

    Parameters
    ----------
    matrix : array_like
        Any 2-D real matrix; it is copied, never modified.
    tol : float
        Entries with absolute value `<= tol` are treated as zero.

    Returns
    -------
    Tuple[np.ndarray, List[int]]
        The echelon matrix (near-zero entries flushed to 0) and the pivot
        column of each nonzero row, in row order.
    """
    a = _as_matrix(matrix)
    n_rows, n_cols = a.shape
    pivot_cols: List[int] = []
    row = 0

    for col in range(n_cols):
        if row >= n_rows:
            break

        pivot = row + int(np.argmax(np.abs(a[row:, col])))
        if abs(a[pivot, col]) <= tol:
            continue

        if pivot != row:
            a[[row, pivot]] = a[[pivot, row]]

        below = row + 1 + np.flatnonzero(np.abs(a[row + 1:, col]) > tol)
        if below.size:
            factors = a[below, col] / a[row, col]
            a[below, col:] -= np.outer(factors, a[row, col:])
            a[below, col] = 0.0

        pivot_cols.append(col)
        row += 1

    a[np.abs(a) <= tol] = 0.0
    return a, pivot_cols


def rank(matrix, tol: float = ZERO_TOLERANCE) -> int:
    """Numerical rank: the number of pivots found by `row_echelon`."""
    _, pivot_cols = row_echelon(matrix, tol)
    return len(pivot_cols)


def kernel_basis(matrix, tol: float = ZERO_TOLERANCE) -> List[np.ndarray]:
    """
    Basis of the null space `{x : matrix @ x = 0}`.

    One vector per free (non-pivot) column: the free variable is set to 1,
    the other free variables to 0, and the pivot variables are solved by back
    substitution through the echelon form.

    Returns
    -------
    List[np.ndarray]
        Basis vectors of length `n_cols`. A `0 x n` matrix yields the standard
        basis; a matrix with no columns yields an empty list.
    """
    reduced, pivot_cols = row_echelon(matrix, tol)
    n_cols = reduced.shape[1]
    pivot_set = set(pivot_cols)
    basis: List[np.ndarray] = []

    for free in range(n_cols):
        if free in pivot_set:
            continue
        x = np.zeros(n_cols, dtype=np.float64)
        x[free] = 1.0
        for r in range(len(pivot_cols) - 1, -1, -1):
            pc = pivot_cols[r]
            residual = float(reduced[r, pc + 1:] @ x[pc + 1:])
            x[pc] = -residual / reduced[r, pc]
        x[np.abs(x) <= tol] = 0.0
        basis.append(x)

    return basis
