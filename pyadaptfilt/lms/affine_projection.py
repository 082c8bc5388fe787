#  lms.affine_projection.py
#
#       Implements the Affine-Projection algorithm for REAL valued data.
#       (Algorithm 4.6 - book: Adaptive Filtering: Algorithms and Practical
#                                                              Implementation, Diniz)

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from pyadaptfilt.base import AdaptiveFilter
from pyadaptfilt._utils import linalg
from pyadaptfilt._utils.typing import ArrayLike
from pyadaptfilt._utils.weights import WeightsFill
from pyadaptfilt.errors import InvalidArgumentError


class AffineProjection(AdaptiveFilter):
    """
    Affine-Projection Algorithm (APA) adaptive filter.

    Reuses the last ``P`` input windows and desired samples for every update,
    which speeds up convergence over LMS/NLMS on highly correlated input. Each
    step solves a regularized ``P x P`` system.

    Parameters
    ----------
    filter_length : int, optional
        Number of taps ``N``. Required unless ``w_init`` is given.
    step_size : float, optional
        Learning rate ``mu``. Default is 0.1.
    order : int, optional
        Projection order ``P`` (number of retained windows). Default is 5.
    eps : float, optional
        Diagonal loading of the projection correlation matrix. Default 1e-3.
    w_init : array_like of float, optional
        Initial weights, shape ``(N,)``.
    fill : WeightsFill or str, optional
        Generated weights when ``w_init`` is None. Default ``ZEROS``.

    Notes
    -----
    ``X(k) in R^{N x P}`` stores the windows as columns, newest in column 0,
    and ``d_vec(k)`` the matching desired samples. Then

    .. math::
        e_{vec}(k) = d_{vec}(k) - X^T(k)\\,w(k),

    .. math::
        w(k+1) = w(k) + \\mu\\, X(k)\\,(X^T(k)X(k) + \\epsilon I_P)^{-1} e_{vec}(k).

    The inverse comes from an LU solve against ``I_P``. When the matrix is
    numerically singular (e.g. ``eps = 0`` with repeated windows) the solve is
    redone by least squares; the number of such fallbacks is reported in
    ``result.extra["singular_fallbacks"]``.

    Only the newest components ``y_vec(k)[0]`` and ``e_vec(k)[0]`` are
    reported as the output and error at ``k``.

    References
    ----------
    .. [1] P. S. R. Diniz, *Adaptive Filtering: Algorithms and Practical
       Implementation*, 5th ed., Algorithm 4.6.
    .. [2] A. Gonzalez, M. Ferrer, F. Albu, M. de Diego, "Affine projection
       algorithms: evolution to smart and fast algorithms and applications",
       EUSIPCO 2012.
    """

    step_size: float
    order: int
    eps: float

    def __init__(
        self,
        filter_length: Optional[int] = None,
        step_size: float = 0.1,
        order: int = 5,
        eps: float = 1e-3,
        w_init: Optional[ArrayLike] = None,
        fill: Union[WeightsFill, str] = WeightsFill.ZEROS,
    ) -> None:
        super().__init__(filter_length=filter_length, w_init=w_init, fill=fill)
        if int(order) <= 0:
            raise InvalidArgumentError(f"Projection order must be positive. Got {int(order)}.")
        self.step_size = float(step_size)
        self.order = int(order)
        self.eps = float(eps)

        self.ide = linalg.identity(self.order)
        self.ide_eps = linalg.identity(self.order, self.eps)
        self._reset_state()

    def _reset_state(self) -> None:
        self.x_mem = np.zeros((self.filter_length, self.order), dtype=float)
        self.d_mem = np.zeros(self.order, dtype=float)
        self.singular_fallbacks = 0
        self._last_corr: Optional[np.ndarray] = None

    def _step(self, x_k: np.ndarray, d_k: float) -> Tuple[float, float]:
        self.x_mem[:, 1:] = self.x_mem[:, :-1]
        self.x_mem[:, 0] = x_k
        self.d_mem[1:] = self.d_mem[:-1]
        self.d_mem[0] = d_k

        x_mem_t = linalg.transpose(self.x_mem)
        y_vec = linalg.matmul(x_mem_t, linalg.transpose(self.w)).ravel()
        e_vec = self.d_mem - y_vec

        corr = linalg.matmul(x_mem_t, self.x_mem) + self.ide_eps
        self._last_corr = corr

        res = linalg.solve_robust(corr, self.ide)
        if res.singular:
            self.singular_fallbacks += 1
        z = res.solution

        dw = linalg.matmul(self.x_mem, linalg.matmul(z, linalg.transpose(e_vec))).ravel()
        self.w += self.step_size * dw

        return float(y_vec[0]), float(e_vec[0])

    def _internal_states(self) -> Dict[str, Any]:
        return {
            "last_regressor_matrix": self.x_mem.copy(),
            "last_correlation_matrix": None if self._last_corr is None else self._last_corr.copy(),
            "singular_fallbacks": int(self.singular_fallbacks),
        }

    @classmethod
    def default_test_init_kwargs(cls, length: int) -> dict:
        return {"step_size": 0.1, "order": 2}


AP = AffineProjection
# EOF
