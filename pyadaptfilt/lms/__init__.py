# pyadaptfilt/lms/__init__.py

from .lms import LMS, LeakyLMS
from .nlms import NLMS, NLMSFilter
from .sign_sign import SSLMS
from .gngd import GNGD
from .affine_projection import AffineProjection, AP

__all__ = [
    "LMS",
    "LeakyLMS",
    "NLMS",
    "NLMSFilter",
    "SSLMS",
    "GNGD",
    "AffineProjection",
    "AP",
]
