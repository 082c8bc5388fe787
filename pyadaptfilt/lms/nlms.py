#  lms.nlms.py
#
#       Implements the Normalized LMS algorithm for REAL valued data.
#       (Algorithm 4.3 - book: Adaptive Filtering: Algorithms and Practical
#                                                              Implementation, Diniz)

from __future__ import annotations

import warnings
from typing import Optional, Tuple, Union

import numpy as np

from pyadaptfilt.base import AdaptiveFilter, OptimizationResult
from pyadaptfilt._utils.typing import ArrayLike
from pyadaptfilt._utils.weights import WeightsFill

# Regularization added to the input power (MATLAB's eps); keeps the step finite on all-zero windows.
NLMS_REGULARIZATION: float = 2.2204460492503131e-16


def _check_step_size(step_size: float) -> None:
    if step_size < 0 or step_size > 2:
        warnings.warn(
            f"NLMS step_size={step_size}: keep the learning rate between 0 and 2 to avoid diverging results",
            UserWarning,
            stacklevel=3,
        )


class NLMS(AdaptiveFilter):
    """
    Normalized LMS (NLMS) adaptive filter, with optional leakage.

    LMS whose step size is divided by the instantaneous power of the input
    window, which makes convergence insensitive to the input scale.

    Parameters
    ----------
    filter_length : int, optional
        Number of taps ``N``. Required unless ``w_init`` is given.
    step_size : float, optional
        Normalized learning rate ``mu``. Default is 0.1. Values outside
        ``[0, 2]`` are accepted with a warning.
    leakage : float, optional
        Leakage factor in ``[0, 1]``. Default 1 (no leakage).
    w_init : array_like of float, optional
        Initial weights, shape ``(N,)``.
    fill : WeightsFill or str, optional
        Generated weights when ``w_init`` is None. Default ``ZEROS``.

    Notes
    -----
    .. math::
        w[k+1] = \\lambda\\, w[k] + \\frac{\\mu}{\\|x_k\\|^2 + \\epsilon_0}\\, e[k]\\, x_k,

    where ``epsilon_0 = 2.2204460492503131e-16``.
    """

    step_size: float
    leakage: float

    def __init__(
        self,
        filter_length: Optional[int] = None,
        step_size: float = 0.1,
        leakage: float = 1.0,
        w_init: Optional[ArrayLike] = None,
        fill: Union[WeightsFill, str] = WeightsFill.ZEROS,
    ) -> None:
        super().__init__(filter_length=filter_length, w_init=w_init, fill=fill)
        _check_step_size(float(step_size))
        self.step_size = float(step_size)
        self.leakage = float(leakage)

    def _step(self, x_k: np.ndarray, d_k: float) -> Tuple[float, float]:
        y_k = float(np.dot(self.w, x_k))
        power_x = float(np.dot(x_k, x_k))
        e_k = d_k - y_k

        self.w *= self.leakage
        self.w += (self.step_size / (NLMS_REGULARIZATION + power_x)) * e_k * x_k

        return y_k, e_k

    @classmethod
    def default_test_init_kwargs(cls, length: int) -> dict:
        return {"step_size": 0.5}


class NLMSFilter(NLMS):
    """
    NLMS adaptive filter with newest-first tap ordering.

    Same recursion as :class:`NLMS` without leakage, but tap ``w[0]`` multiplies
    the newest sample: ``y[k] = sum_i w[i] x_k[N-1-i]``. Weights obtained here
    are the reverse of the ones :class:`NLMS` converges to.
    """

    def __init__(
        self,
        filter_length: Optional[int] = None,
        step_size: float = 0.1,
        w_init: Optional[ArrayLike] = None,
        fill: Union[WeightsFill, str] = WeightsFill.ZEROS,
    ) -> None:
        super().__init__(
            filter_length=filter_length,
            step_size=step_size,
            leakage=1.0,
            w_init=w_init,
            fill=fill,
        )

    def _step(self, x_k: np.ndarray, d_k: float) -> Tuple[float, float]:
        return super()._step(x_k[::-1], d_k)

    def _window_taps(self) -> np.ndarray:
        return self.w[::-1]

    def run(self, desired: ArrayLike, x: ArrayLike, **kwargs) -> OptimizationResult:
        """Alias of ``filter``."""
        return self.filter(desired, x, **kwargs)
# EOF
