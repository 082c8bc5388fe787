# pyadaptfilt/errors.py

from __future__ import annotations

import numpy as np

__all__ = ["InvalidArgumentError", "UninitializedStateError", "SingularMatrixError"]


class InvalidArgumentError(ValueError):
    """Malformed construction or run inputs.

    Raised for null/empty arrays, mismatched signal lengths, a filter length
    larger than the signal, or an unknown weight fill strategy. No filter state
    is touched when this is raised.
    """


class UninitializedStateError(RuntimeError):
    """Accessor called before any successful run of ``filter()``."""


class SingularMatrixError(np.linalg.LinAlgError):
    """Direct factorization found a numerically singular matrix.

    Only produced inside the matrix kernel; the affine projection step retries
    with the least-squares solver instead of letting it reach the caller.
    """
# EOF
