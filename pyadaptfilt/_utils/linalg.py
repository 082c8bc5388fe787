# ._utils.linalg.py
#
#       Small dense-matrix kernel used by the RLS and Affine Projection filters.
#       Vectors passed to the products are promoted to 2-D (row vectors), so the
#       same helpers serve the matrix-matrix and matrix-vector cases.

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy import linalg as sla

from pyadaptfilt.errors import SingularMatrixError
from .typing import ArrayLike

__all__ = [
    "SINGULARITY_THRESHOLD",
    "SolveResult",
    "identity",
    "transpose",
    "matmul",
    "outer",
    "lu_solve",
    "lstsq_solve",
    "solve_robust",
]

# Smallest pivot magnitude accepted by the LU factorization.
SINGULARITY_THRESHOLD: float = 1e-11


@dataclass
class SolveResult:
    """Outcome of a direct solve.

    ``solution`` is None exactly when ``singular`` is True; ``error`` then holds
    the SingularMatrixError describing the failed pivot.
    """

    solution: Optional[np.ndarray]
    singular: bool = False
    error: Optional[SingularMatrixError] = None


def _as_matrix(a: ArrayLike) -> np.ndarray:
    a = np.asarray(a, dtype=float)
    if a.ndim == 1:
        return a.reshape(1, -1)
    if a.ndim == 2:
        return a
    raise ValueError(f"Expected a vector or a matrix. Got shape={a.shape}.")


def identity(n: int, scale: float = 1.0) -> np.ndarray:
    """``scale * I_n``; off-diagonal entries stay zero even for an infinite scale."""
    m = np.zeros((int(n), int(n)), dtype=float)
    np.fill_diagonal(m, float(scale))
    return m


def transpose(a: ArrayLike) -> np.ndarray:
    """Transpose; a 1-D vector becomes a column."""
    return _as_matrix(a).T.copy()


def matmul(a: ArrayLike, b: ArrayLike) -> np.ndarray:
    """Matrix product with shape checking."""
    a2, b2 = _as_matrix(a), _as_matrix(b)
    if a2.shape[1] != b2.shape[0]:
        raise ValueError(f"Cannot multiply shapes {a2.shape} and {b2.shape}.")
    return a2 @ b2


def outer(u: ArrayLike, v: ArrayLike) -> np.ndarray:
    """Outer product ``u v^T`` (column times row)."""
    return matmul(transpose(np.ravel(u)), np.ravel(v))


def lu_solve(a: ArrayLike, b: ArrayLike, threshold: float = SINGULARITY_THRESHOLD) -> SolveResult:
    """Solve ``a @ z = b`` by LU factorization with partial pivoting.

    A pivot whose magnitude is not above ``threshold`` marks the matrix as
    numerically singular; the result then carries no solution.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"lu_solve expects a square matrix. Got shape={a.shape}.")

    # exact zero pivots are reported below, not as a LinAlgWarning
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", sla.LinAlgWarning)
        lu, piv = sla.lu_factor(a, check_finite=False)

    pivots = np.abs(np.diag(lu))
    if pivots.size and not np.all(np.isfinite(pivots)):
        return SolveResult(None, True, SingularMatrixError("Non-finite pivot in LU factorization"))
    if pivots.size and float(pivots.min()) <= threshold:
        k = int(np.argmin(pivots))
        return SolveResult(
            None,
            True,
            SingularMatrixError(f"Matrix is singular: pivot {k} = {pivots[k]:.3e} <= {threshold:.1e}"),
        )

    return SolveResult(sla.lu_solve((lu, piv), b, check_finite=False))


def lstsq_solve(a: ArrayLike, b: ArrayLike) -> np.ndarray:
    """Minimum-norm least-squares solution of ``a @ z = b`` (pseudo-inverse)."""
    z, _, _, _ = sla.lstsq(np.asarray(a, dtype=float), np.asarray(b, dtype=float))
    return z


def solve_robust(a: ArrayLike, b: ArrayLike) -> SolveResult:
    """LU solve, falling back to least squares on a singular matrix.

    The returned result has ``singular=True`` when the fallback was used, but
    always carries a solution.
    """
    res = lu_solve(a, b)
    if res.singular:
        return SolveResult(lstsq_solve(a, b), True, res.error)
    return res
