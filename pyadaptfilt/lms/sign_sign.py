#  lms.sign_sign.py
#
#       Implements the Sign-Sign LMS algorithm for REAL valued data.
#       (Section 4.2 - book: Adaptive Filtering: Algorithms and Practical
#                                                              Implementation, Diniz)

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from pyadaptfilt.base import AdaptiveFilter
from pyadaptfilt._utils.typing import ArrayLike
from pyadaptfilt._utils.weights import WeightsFill


class SSLMS(AdaptiveFilter):
    """
    Sign-Sign LMS (SSLMS) adaptive filter, with optional leakage.

    Low-complexity LMS variant that keeps only the sign of the error and the
    sign of every input sample. Each tap moves by exactly ``mu`` (after
    leakage) per step, whatever the signal amplitude.

    Parameters
    ----------
    filter_length : int, optional
        Number of taps ``N``. Required unless ``w_init`` is given.
    step_size : float, optional
        Learning rate ``mu``. Default is 1e-2.
    leakage : float, optional
        Leakage factor in ``[0, 1]``. Default 1 (no leakage).
    w_init : array_like of float, optional
        Initial weights, shape ``(N,)``.
    fill : WeightsFill or str, optional
        Generated weights when ``w_init`` is None. Default ``ZEROS``.

    Notes
    -----
    .. math::
        w[k+1] = \\lambda\\, w[k] + \\mu\\, \\operatorname{sign}(e[k])\\,
                 \\operatorname{sign}(x_k),

    with ``sign(0) = 0``.
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
        self.w += self.step_size * np.sign(e_k) * np.sign(x_k)

        return y_k, e_k

    @classmethod
    def default_test_init_kwargs(cls, length: int) -> dict:
        return {"step_size": 1e-2}
# EOF
