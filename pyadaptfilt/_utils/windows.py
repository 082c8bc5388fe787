# ._utils.windows.py
from __future__ import annotations

from typing import Iterator

import numpy as np

from .typing import ArrayLike

__all__ = ["padded_signal", "window_at", "causal_windows"]


def padded_signal(x: ArrayLike, length: int) -> np.ndarray:
    """Zero-pad the start of ``x`` with ``length - 1`` samples.

    Sample ``x[0]`` is zeroed as well: a window at index ``i`` only takes
    ``x[i - j]`` for ``i - j > 0``, so the first sample never reaches a window.
    """
    x = np.asarray(x, dtype=float).ravel()
    m = int(length) - 1
    x_padded = np.zeros(x.size + m, dtype=float)
    x_padded[m:] = x
    if x.size:
        x_padded[m] = 0.0
    return x_padded


def window_at(x_padded: np.ndarray, k: int, length: int) -> np.ndarray:
    """Window for time index ``k``, oldest sample first, newest in the last slot."""
    return x_padded[k : k + int(length)]


def causal_windows(x: ArrayLike, length: int) -> Iterator[np.ndarray]:
    """Yield one length-``length`` window per sample of ``x``, in time order.

    Slot ``length - 1 - j`` of window ``i`` holds ``x[i - j]`` when ``i - j > 0``
    and zero otherwise. The yielded arrays are views; copy them to keep them.
    """
    n = int(length)
    x_padded = padded_signal(x, n)
    for k in range(x_padded.size - n + 1):
        yield window_at(x_padded, k, n)
