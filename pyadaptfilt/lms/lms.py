#  lms.lms.py
#
#       Implements the LMS and Leaky LMS algorithms for REAL valued data.
#       (Algorithm 3.2 - book: Adaptive Filtering: Algorithms and Practical
#                                                              Implementation, Diniz)

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from pyadaptfilt.base import AdaptiveFilter
from pyadaptfilt._utils.typing import ArrayLike
from pyadaptfilt._utils.weights import WeightsFill


class LMS(AdaptiveFilter):
    """
    Least-Mean Squares (LMS) adaptive filter, with optional leakage.

    Stochastic-gradient adaptation of an FIR filter that minimises the
    instantaneous squared a priori error. A leakage factor below 1 decays the
    weights every step, which improves stability and tracking at the cost of
    some bias.

    Parameters
    ----------
    filter_length : int, optional
        Number of taps ``N``. Required unless ``w_init`` is given.
    step_size : float, optional
        Learning rate ``mu``. Default is 1e-2. For a stable filter keep
        ``0 <= mu <= 2 / sum(x_k**2)``; this is not enforced.
    leakage : float, optional
        Leakage factor in ``[0, 1]``. ``1`` (default) is plain LMS.
    w_init : array_like of float, optional
        Initial weights, shape ``(N,)``.
    fill : WeightsFill or str, optional
        Generated weights when ``w_init`` is None. Default ``ZEROS``.

    Notes
    -----
    At iteration ``k`` the window ``x_k`` holds the ``N`` most recent samples,
    oldest first. Then

    .. math::
        y[k] = w^T[k] x_k, \\qquad e[k] = d[k] - y[k],

    .. math::
        w[k+1] = \\lambda\\, w[k] + \\mu\\, e[k]\\, x_k,

    with ``lambda`` the leakage factor.

    References
    ----------
    .. [1] P. S. R. Diniz, *Adaptive Filtering: Algorithms and Practical
       Implementation*, 5th ed., Algorithm 3.2.
    """

    step_size: float
    leakage: float

    def __init__(
        self,
        filter_length: Optional[int] = None,
        step_size: float = 1e-2,
        leakage: float = 1.0,
        w_init: Optional[ArrayLike] = None,
        fill: Union[WeightsFill, str] = WeightsFill.ZEROS,
    ) -> None:
        super().__init__(filter_length=filter_length, w_init=w_init, fill=fill)
        self.step_size = float(step_size)
        self.leakage = float(leakage)

    def _step(self, x_k: np.ndarray, d_k: float) -> Tuple[float, float]:
        y_k = float(np.dot(self.w, x_k))
        e_k = d_k - y_k

        self.w *= self.leakage
        self.w += self.step_size * e_k * x_k

        return y_k, e_k

    @classmethod
    def default_test_init_kwargs(cls, length: int) -> dict:
        return {"step_size": 0.05}


class LeakyLMS(LMS):
    """
    Leaky LMS adaptive filter.

    LMS with a weight leakage factor ``lambda < 1`` (default 0.99). See
    :class:`LMS` for the recursion.
    """

    def __init__(
        self,
        filter_length: Optional[int] = None,
        step_size: float = 1e-2,
        leakage: float = 0.99,
        w_init: Optional[ArrayLike] = None,
        fill: Union[WeightsFill, str] = WeightsFill.ZEROS,
    ) -> None:
        super().__init__(
            filter_length=filter_length,
            step_size=step_size,
            leakage=leakage,
            w_init=w_init,
            fill=fill,
        )

    @classmethod
    def default_test_init_kwargs(cls, length: int) -> dict:
        return {"step_size": 0.05, "leakage": 0.9999}
# EOF
