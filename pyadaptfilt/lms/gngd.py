#  lms.gngd.py
#
#       Implements the Generalized Normalized Gradient Descent algorithm for REAL
#       valued data.
#       (D. P. Mandic, "A generalized normalized gradient descent algorithm",
#        IEEE Signal Processing Letters, 11(2), 2004)

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from pyadaptfilt.base import AdaptiveFilter
from pyadaptfilt._utils.typing import ArrayLike
from pyadaptfilt._utils.weights import WeightsFill


class GNGD(AdaptiveFilter):
    """
    Generalized Normalized Gradient Descent (GNGD) adaptive filter.

    NLMS extension whose regularization term ``eps`` in the step-size
    denominator is itself adapted by a gradient rule, so the effective learning
    rate follows the dynamics of the input.

    Parameters
    ----------
    filter_length : int, optional
        Number of taps ``N``. Required unless ``w_init`` is given.
    step_size : float, optional
        Learning rate ``mu``. Default is 1.0.
    eps : float, optional
        Initial compensation term. Default is 1.0. Adapted every step.
    rho : float, optional
        Adaptation rate of ``eps``. Default is 0.1.
    w_init : array_like of float, optional
        Initial weights, shape ``(N,)``.
    fill : WeightsFill or str, optional
        Generated weights when ``w_init`` is None. Default ``ZEROS``.

    Notes
    -----
    Per step, with ``e_prev``/``x_prev`` the stored previous error and window:

    .. math::
        \\epsilon \\leftarrow \\epsilon - \\rho\\mu\\, e[k]\\, e_{prev}\\,
            \\frac{x_k^T x_{prev}}{(x_{prev}^T x_{prev} + \\epsilon)^2},

    .. math::
        w[k+1] = w[k] + \\frac{\\mu}{x_k^T x_k + \\epsilon}\\, e[k]\\, x_k.

    Only ``e_prev`` is refreshed after each step. ``x_prev`` keeps its initial
    zeros, so ``eps`` stays at its initial value across a run.
    """

    step_size: float
    rho: float
    eps: float

    def __init__(
        self,
        filter_length: Optional[int] = None,
        step_size: float = 1.0,
        eps: float = 1.0,
        rho: float = 0.1,
        w_init: Optional[ArrayLike] = None,
        fill: Union[WeightsFill, str] = WeightsFill.ZEROS,
    ) -> None:
        super().__init__(filter_length=filter_length, w_init=w_init, fill=fill)
        self.step_size = float(step_size)
        self.rho = float(rho)
        self._eps0 = float(eps)
        self._reset_state()

    def _reset_state(self) -> None:
        self.eps = self._eps0
        self.last_e = 0.0
        self.last_x = np.zeros(self.filter_length, dtype=float)

    def _step(self, x_k: np.ndarray, d_k: float) -> Tuple[float, float]:
        y_k = float(np.dot(x_k, self.w))
        e_k = d_k - y_k

        # IEEE semantics: eps = 0 yields inf/nan instead of raising
        with np.errstate(divide="ignore", invalid="ignore"):
            denom = (np.float64(np.dot(self.last_x, self.last_x)) + self.eps) ** 2
            grad = np.float64(self.rho * self.step_size * e_k * self.last_e) * np.dot(x_k, self.last_x)
            self.eps = float(self.eps - grad / denom)

            nu = np.float64(self.step_size) / (np.dot(x_k, x_k) + self.eps)
            self.w += nu * e_k * x_k

        self.last_e = e_k
        return y_k, e_k

    def _internal_states(self) -> Dict[str, Any]:
        return {"eps": self.eps, "last_e": self.last_e, "last_x": self.last_x.copy()}
# EOF
