"""Row-level helpers operating on datasets.

NaN marks a missing (unlabeled) value. Note that :func:`labeled` and
:func:`unlabeled` overlap: a row with some but not all values missing is
reported by both.
"""
from __future__ import annotations

import numpy as np

from .shapes import flatten


def labeled(X) -> np.ndarray:
    """Indices of rows holding at least one non-missing value."""
    Xf = flatten(X)
    return np.flatnonzero(np.any(~np.isnan(Xf), axis=1))


def unlabeled(X) -> np.ndarray:
    """Indices of rows holding at least one missing value."""
    Xf = flatten(X)
    return np.flatnonzero(np.any(np.isnan(Xf), axis=1))


def unique_rows(X) -> np.ndarray:
    """Distinct rows in lexicographic order."""
    Xf = flatten(X)
    if Xf.shape[0] == 0:
        return Xf.copy()
    return np.unique(Xf, axis=0)


def count_unique_rows(X) -> int:
    return int(unique_rows(X).shape[0])
