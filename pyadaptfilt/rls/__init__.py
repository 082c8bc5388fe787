# pyadaptfilt/rls/__init__.py

from .rls import RLS

__all__ = ["RLS"]
