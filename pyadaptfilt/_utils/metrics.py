import numpy as np
from .typing import ArrayLike

__all__ = ["db10", "tail_mse"]


def db10(x: ArrayLike, *, eps: float = 1e-20) -> np.ndarray:
    """10*log10(x) with numerical guard."""
    x = np.asarray(x, dtype=float)
    return 10.0 * np.log10(np.maximum(x, eps))


def tail_mse(errors: ArrayLike, *, tail_window: int = 200) -> float:
    """Mean squared error over the last tail_window samples (or all if shorter)."""
    v = np.asarray(errors, dtype=float).ravel()
    if v.size == 0:
        return float("nan")
    w = int(tail_window)
    if w <= 0:
        return float(np.mean(v ** 2))
    return float(np.mean(v[-min(v.size, w):] ** 2))
