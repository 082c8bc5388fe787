# tests/conftest.py

from __future__ import annotations

import numpy as np
import pytest
from scipy import signal

from pyadaptfilt.base import OptimizationResult


def _last_coefficients(obj):
    """
    Extract final coefficients from a result or a plain vector.

    Supported:
      - OptimizationResult: last row of result.coefficients
      - np.ndarray/list: returned as-is (assumed final coefficients)
    """
    if isinstance(obj, OptimizationResult):
        coeffs = np.asarray(obj.coefficients)
        if coeffs.ndim >= 2:
            return coeffs[-1]
        return coeffs
    return np.asarray(obj)


@pytest.fixture
def calculate_msd():
    """
    Mean-square deviation (MSD) between true coefficients and an estimate.

    Filters use oldest-first windows, so the weights they converge to are the
    impulse response reversed. Pass the reversed response as ``w_true``.
    """
    def _calc(w_true, w_est):
        w_true_flat = np.asarray(w_true, dtype=float).reshape(-1)
        w_hat_flat = np.asarray(_last_coefficients(w_est), dtype=float).reshape(-1)

        if w_true_flat.shape != w_hat_flat.shape:
            raise ValueError(
                f"MSD shape mismatch: w_true has {w_true_flat.shape}, w_est has {w_hat_flat.shape}"
            )

        return float(np.mean((w_true_flat - w_hat_flat) ** 2))

    return _calc


@pytest.fixture
def correlated_data():
    rng = np.random.default_rng(42)
    n_samples = 2000

    h_unknown = np.array([0.6, -0.3, 0.1, 0.05], dtype=np.float64)
    length = int(len(h_unknown))

    white_noise = rng.standard_normal(n_samples).astype(np.float64, copy=False)
    x = np.convolve(white_noise, np.array([1.0, 0.8, 0.5], dtype=np.float64), mode="full")[:n_samples]

    d = np.convolve(x, h_unknown, mode="full")[:n_samples].astype(np.float64, copy=False)

    return x, d, h_unknown, length


@pytest.fixture
def system_data():
    rng = np.random.default_rng(42)
    n_samples = 5000

    w_optimal = np.array([0.4, -0.2, 0.1], dtype=np.float64)
    length = int(len(w_optimal))

    x = rng.standard_normal(n_samples).astype(np.float64, copy=False)
    d_ideal = signal.lfilter(w_optimal, 1, x).astype(np.float64, copy=False)
    noise = 0.01 * rng.standard_normal(n_samples)

    return {
        "x": x,
        "d_ideal": d_ideal,
        "d_noisy": d_ideal + noise,
        "w_optimal": w_optimal,
        "length": length,
        "n_samples": n_samples,
    }


@pytest.fixture
def rls_test_data():
    rng = np.random.default_rng(42)
    n_samples = 1000

    w_optimal = np.array([0.5, -0.4, 0.2], dtype=np.float64)
    length = int(len(w_optimal))

    u = rng.standard_normal(n_samples).astype(np.float64, copy=False)

    x = np.zeros(n_samples, dtype=np.float64)
    for i in range(1, n_samples):
        x[i] = 0.9 * x[i - 1] + u[i]

    d = np.convolve(x, w_optimal, mode="full")[:n_samples].astype(np.float64, copy=False)

    return {"x": x, "d": d, "w_optimal": w_optimal, "length": length, "n_samples": n_samples}


@pytest.fixture
def lms_data(correlated_data):
    x, d, h_unknown, length = correlated_data
    return {"x": x, "d": d, "h_unknown": h_unknown, "length": length, "n_samples": int(len(x))}
