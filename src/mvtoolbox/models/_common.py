from __future__ import annotations

from typing import Tuple
import numpy as np


def solve_ridge(A: np.ndarray, Y: np.ndarray, ridge: float = 0.0, n_free: int = 0) -> np.ndarray:
    """Solve min ||A C - Y||^2 + ridge ||C||^2 for C.

    The last ``n_free`` columns of A (intercept-like terms) are not regularized.
    """
    if ridge == 0.0:
        return np.linalg.lstsq(A, Y, rcond=None)[0]
    D = np.eye(A.shape[1]) * float(ridge)
    if n_free > 0:
        D[-n_free:, -n_free:] = 0.0
    return np.linalg.solve(A.T @ A + D, A.T @ Y)


def ridge_lstsq(X: np.ndarray, Y: np.ndarray, ridge: float = 0.0, fit_intercept: bool = True) -> Tuple[np.ndarray, np.ndarray]:
    """Solve linear least squares with optional ridge and intercept.

    Returns (W, b) where W has shape (d, k) and b has shape (k,) for a design
    with k columns. If fit_intercept=False, b is all zeros.
    """
    X = np.asarray(X, dtype=float)
    Y = np.asarray(Y, dtype=float)
    if Y.ndim == 1:
        Y = Y.reshape(-1, 1)
    if fit_intercept:
        X_ = np.c_[X, np.ones((X.shape[0], 1))]
        coef = solve_ridge(X_, Y, ridge=ridge, n_free=1)
        return coef[:-1], np.asarray(coef[-1]).ravel()
    W = solve_ridge(X, Y, ridge=ridge)
    return W, np.zeros(Y.shape[1], dtype=float)
