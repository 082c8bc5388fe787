#  rls.rls.py
#
#      Implements the RLS algorithm for REAL valued data.
#      (Algorithm 5.2 - book: Adaptive Filtering: Algorithms and Practical
#                                                       Implementation, Diniz)

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from pyadaptfilt.base import AdaptiveFilter
from pyadaptfilt._utils import linalg
from pyadaptfilt._utils.typing import ArrayLike
from pyadaptfilt._utils.weights import WeightsFill


class RLS(AdaptiveFilter):
    """
    Recursive Least-Squares (RLS) adaptive filter.

    Keeps a running estimate ``R`` of the inverse input autocorrelation matrix
    and updates it with a rank-one correction each step, giving much faster
    convergence than LMS on coloured input.

    Parameters
    ----------
    filter_length : int, optional
        Number of taps ``N``. Required unless ``w_init`` is given.
    forgetting_factor : float, optional
        ``lambda`` in ``(0, 1]``, usually close to 1. Default 0.99.
    eps : float, optional
        Initialisation constant: ``R(0) = I / eps``. Default 0.1.
    w_init : array_like of float, optional
        Initial weights, shape ``(N,)``.
    fill : WeightsFill or str, optional
        Generated weights when ``w_init`` is None. Default ``ZEROS``.

    Notes
    -----
    .. math::
        R(k) = \\frac{1}{\\lambda}\\left(R(k-1) -
               \\frac{R(k-1)\\,x_k x_k^T\\,R(k-1)}{\\lambda + x_k^T R(k-1)\\,x_k}\\right),

    .. math::
        w(k+1) = w(k) + e[k]\\, R(k)\\, x_k.

    ``R`` is not re-symmetrized, and the gain denominator is not guarded.
    """

    forgetting_factor: float
    eps: float

    def __init__(
        self,
        filter_length: Optional[int] = None,
        forgetting_factor: float = 0.99,
        eps: float = 0.1,
        w_init: Optional[ArrayLike] = None,
        fill: Union[WeightsFill, str] = WeightsFill.ZEROS,
    ) -> None:
        super().__init__(filter_length=filter_length, w_init=w_init, fill=fill)
        self.forgetting_factor = float(forgetting_factor)
        self.eps = float(eps)
        self._reset_state()

    def _reset_state(self) -> None:
        with np.errstate(divide="ignore"):
            self.R = linalg.identity(self.filter_length, np.float64(1.0) / self.eps)

    def _step(self, x_k: np.ndarray, d_k: float) -> Tuple[float, float]:
        lam = self.forgetting_factor

        y_k = float(np.dot(x_k, self.w))
        e_k = d_k - y_k

        # unguarded: eps = 0 or lam = 0 propagate inf/nan
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            r1 = linalg.matmul(linalg.matmul(self.R, linalg.outer(x_k, x_k)), self.R)
            r2 = linalg.matmul(linalg.matmul(x_k, self.R), linalg.transpose(x_k))[0, 0] + lam

            self.R -= r1 / r2
            self.R *= np.float64(1.0) / lam

            dw = linalg.matmul(self.R, linalg.transpose(x_k)).ravel()
            self.w += e_k * dw

        return y_k, e_k

    def _internal_states(self) -> Dict[str, Any]:
        return {"inverse_correlation": self.R.copy()}

    @classmethod
    def default_test_init_kwargs(cls, length: int) -> dict:
        return {"forgetting_factor": 0.999, "eps": 0.1}
# EOF
