# ._utils.weights.py
from __future__ import annotations

from enum import Enum
from typing import Optional, Union

import numpy as np

from pyadaptfilt.errors import InvalidArgumentError
from .typing import ArrayLike

__all__ = ["WeightsFill", "init_weights"]


class WeightsFill(Enum):
    """How generated filter weights are initialised.

    RANDOM: each tap drawn uniformly in [0, 1) from NumPy's global generator
            (seed it with ``np.random.seed`` for reproducible runs).
    ZEROS:  every tap set to 0.
    """

    RANDOM = "random"
    ZEROS = "zeros"

    @classmethod
    def parse(cls, fill: Union["WeightsFill", str]) -> "WeightsFill":
        if isinstance(fill, cls):
            return fill
        if isinstance(fill, str):
            try:
                return cls(fill.strip().lower())
            except ValueError:
                pass
        raise InvalidArgumentError(f"Unknown weights fill method: {fill!r}")


def init_weights(
    filter_length: Optional[int] = None,
    w_init: Optional[ArrayLike] = None,
    fill: Union[WeightsFill, str] = WeightsFill.ZEROS,
) -> np.ndarray:
    """Build the initial weight vector.

    Explicit ``w_init`` values are copied (never aliased). Otherwise
    ``filter_length`` taps are generated with ``fill``.
    """
    if w_init is not None:
        w = np.array(w_init, dtype=float).ravel()
        if w.size == 0:
            raise InvalidArgumentError("Weights must be non-null and with a length greater than 0")
        if filter_length is not None and int(filter_length) != w.size:
            raise InvalidArgumentError(
                f"filter_length ({int(filter_length)}) does not match len(w_init) ({w.size})"
            )
        return w

    if filter_length is None:
        raise InvalidArgumentError("Weights must be non-null: pass filter_length or w_init")

    n = int(filter_length)
    if n <= 0:
        raise InvalidArgumentError(f"Filter length must be positive. Got {n}.")

    method = WeightsFill.parse(fill)
    if method is WeightsFill.RANDOM:
        return np.random.random(n)
    return np.zeros(n, dtype=float)
