# tests/test_autodiscovery.py

from __future__ import annotations

import importlib
import inspect
import pkgutil
from dataclasses import dataclass
from typing import Any, Dict, List, Type

import numpy as np
import pytest

import pyadaptfilt
from pyadaptfilt.base import AdaptiveFilter


# ============================================================
# Helpers
# ============================================================

def tail_mse(e: np.ndarray, tail: int = 500) -> float:
    e = np.asarray(e)
    tail = min(int(tail), int(e.size))
    if tail <= 0:
        return float("inf")
    return float(np.mean(e[-tail:] ** 2))


def rel_w_error(w_est: np.ndarray, w_true: np.ndarray, eps: float = 1e-12) -> float:
    w_est = np.asarray(w_est).reshape(-1)
    w_true = np.asarray(w_true).reshape(-1)
    return float(np.linalg.norm(w_est - w_true) / (np.linalg.norm(w_true) + eps))


@dataclass(frozen=True)
class DiscoveredFilter:
    cls: Type[AdaptiveFilter]
    qualname: str
    module: str


def iter_package_modules(pkg) -> List[str]:
    return [m.name for m in pkgutil.walk_packages(pkg.__path__, pkg.__name__ + ".")]


def _all_subclasses(cls: Type) -> List[Type]:
    out: List[Type] = []
    stack = [cls]
    seen = set()
    while stack:
        c = stack.pop()
        for sc in c.__subclasses__():
            if sc in seen:
                continue
            seen.add(sc)
            out.append(sc)
            stack.append(sc)
    return out


def discover_adaptive_filters() -> List[DiscoveredFilter]:
    for modname in iter_package_modules(pyadaptfilt):
        importlib.import_module(modname)

    found = {
        (c.__module__, c.__name__): DiscoveredFilter(cls=c, qualname=c.__name__, module=c.__module__)
        for c in _all_subclasses(AdaptiveFilter)
        if not inspect.isabstract(c) and c.__module__.startswith("pyadaptfilt.")
    }
    return sorted(found.values(), key=lambda z: (z.module, z.qualname))


DISCOVERED = discover_adaptive_filters()


def generate_fir_supervised_data(
    n_samples: int,
    length: int,
    noise_std: float = 0.01,
    seed: int = 0,
    newest_first: bool = False,
) -> Dict[str, Any]:
    """FIR system identification data in the filters' window convention."""
    rng = np.random.default_rng(seed)

    x = rng.standard_normal(n_samples)
    w_true = rng.standard_normal(length)
    noise = noise_std * rng.standard_normal(n_samples)

    x_pad = np.zeros(n_samples + length - 1)
    x_pad[length - 1:] = x

    taps = w_true[::-1] if newest_first else w_true
    d = np.array([float(np.dot(taps, x_pad[k: k + length])) for k in range(n_samples)])

    return {"x": x, "d": d + noise, "w_true": w_true}


def discovered_ids(d: DiscoveredFilter) -> str:
    return f"{d.qualname} ({d.module})"


# ============================================================
# Tests
# ============================================================

def test_every_registered_algorithm_is_discovered():
    names = {d.qualname for d in DISCOVERED}
    assert {cls.__name__ for cls in pyadaptfilt.ALGORITHMS.values()} <= names


@pytest.mark.parametrize("df", DISCOVERED, ids=discovered_ids)
def test_all_filters_fir_identification(df: DiscoveredFilter):
    length = 4
    newest_first = df.cls.__name__ == "NLMSFilter"
    data = generate_fir_supervised_data(3000, length, seed=2026, newest_first=newest_first)

    x, d, w_true = data["x"], data["d"], data["w_true"]

    filt = df.cls(filter_length=length, **df.cls.default_test_init_kwargs(length))
    res = filt.filter(d, x)

    assert res.outputs.shape == d.shape, f"{df.qualname}: outputs shape mismatch"
    assert res.errors.shape == d.shape, f"{df.qualname}: errors shape mismatch"
    assert np.all(np.isfinite(res.outputs)), f"{df.qualname}: outputs has NaN/Inf"
    assert np.all(np.isfinite(res.errors)), f"{df.qualname}: errors has NaN/Inf"

    mse = tail_mse(res.errors)
    assert mse < 1e-2 * float(np.mean(d ** 2)), f"{df.qualname}: MSE tail too high: {mse:.3e}"

    wrel = rel_w_error(filt.get_weights(), w_true)
    assert wrel < 0.1, f"{df.qualname}: rel-w error too high: {wrel:.3f}"
