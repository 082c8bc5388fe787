# pyadaptfilt/__init__.py

from typing import Any, Dict, Type

from .base import AdaptiveFilter, OptimizationResult
from .errors import InvalidArgumentError, UninitializedStateError, SingularMatrixError
from ._utils.weights import WeightsFill
from .lms import *
from .rls import *

__version__ = "0.1.0"

ALGORITHMS: Dict[str, Type[AdaptiveFilter]] = {
    "lms": LMS,
    "leaky_lms": LeakyLMS,
    "nlms": NLMS,
    "nlms_filter": NLMSFilter,
    "sslms": SSLMS,
    "gngd": GNGD,
    "rls": RLS,
    "ap": AffineProjection,
}

__all__ = ["AdaptiveFilter", "OptimizationResult", "WeightsFill",
    "InvalidArgumentError", "UninitializedStateError", "SingularMatrixError",
    "LMS", "LeakyLMS", "NLMS", "NLMSFilter", "SSLMS", "GNGD", "AffineProjection", "AP",
    "RLS",
    "ALGORITHMS", "create_filter", "info"]


def create_filter(name: str, *args: Any, **kwargs: Any) -> AdaptiveFilter:
    """Instantiate an adaptive filter by its registry name (e.g. ``"nlms"``)."""
    key = str(name).strip().lower().replace("-", "_")
    if key not in ALGORITHMS:
        raise InvalidArgumentError(
            f"Unknown adaptive filter {name!r}. Available: {', '.join(sorted(ALGORITHMS))}"
        )
    return ALGORITHMS[key](*args, **kwargs)


def info():
    """Print the algorithms covered by the library."""
    print("\n" + "="*70)
    print("      pyadaptfilt - Online Adaptive Filters")
    print("="*70)
    sections = {
        "LMS family": "LMS, Leaky LMS, NLMS, NLMSFilter, Sign-Sign LMS",
        "Normalized gradient": "GNGD (adaptive regularization)",
        "Projection": "Affine Projection (AP)",
        "Least squares": "RLS",
    }
    for group, algs in sections.items():
        print(f"\n{group:25}: {algs}")

    print("\n" + "-"*70)
    print("Usage example: from pyadaptfilt import LMS")
    print("Registry names: " + ", ".join(sorted(ALGORITHMS)))
    print("="*70 + "\n")
