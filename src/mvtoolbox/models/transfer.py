from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple, cast

import numpy as np

from .base import Regressor
from ..core.config import PooledRidgeConfig
from ..core.errors import DimensionMismatch
from ..core.registry import register_method
from ..types import FloatArray
from ._common import solve_ridge


@dataclass
class PooledParams:
    w: np.ndarray  # (d, k), shared by all datasets
    b: np.ndarray  # (n_tasks, k), one intercept row per dataset


@register_method("pooled_ridge")
class PooledRidgeTransfer(Regressor):
    """Ridge regression fitted jointly over a collection of datasets.

    All datasets share one weight matrix; with ``task_intercepts`` each dataset
    gets its own (unregularized) intercept, otherwise a single intercept is
    shared as well. This is a transfer learner: ``train`` hands the whole
    collection to ``estimate`` and ``map`` returns one prediction matrix per
    dataset. A single dataset is treated as a collection of one.
    """

    transfer = True
    config_cls = PooledRidgeConfig

    def __init__(self, ridge: float = 0.0, fit_intercept: bool = True, task_intercepts: bool = True, verbose: bool = False) -> None:
        super().__init__(ridge=ridge, fit_intercept=fit_intercept, task_intercepts=task_intercepts, verbose=verbose)
        cfg = cast(PooledRidgeConfig, self.config)
        self.ridge = float(cfg.ridge)
        self.fit_intercept = bool(cfg.fit_intercept)
        self.task_intercepts = bool(cfg.task_intercepts)

    def _n_free(self, n_tasks: int) -> int:
        if not self.fit_intercept:
            return 0
        return n_tasks if self.task_intercepts else 1

    def _augment(self, Xs: Sequence[np.ndarray], n_tasks: int) -> np.ndarray:
        """Stack datasets and append the intercept indicator columns."""
        n_free = self._n_free(n_tasks)
        blocks = []
        for t, X in enumerate(Xs):
            ind = np.zeros((X.shape[0], n_free), dtype=float)
            if n_free == 1:
                ind[:, 0] = 1.0
            elif n_free > 1:
                ind[:, t] = 1.0
            blocks.append(np.c_[X, ind])
        return np.vstack(blocks)

    def estimate(self, X: Any, Y: Any) -> PooledParams:
        Xs, Ys = _as_tasks(X), _as_tasks(Y)
        if len(Xs) != len(Ys):
            raise DimensionMismatch(f"Got {len(Xs)} datasets but {len(Ys)} design entries")
        Xs = [np.asarray(x, dtype=float) for x in Xs]
        Ys = [self._targets(x, y) for x, y in zip(Xs, Ys)]
        if len({y.shape[1] for y in Ys}) > 1:
            raise DimensionMismatch("Designs must have the same number of columns for joint fitting")
        n_tasks = len(Xs)
        n_free = self._n_free(n_tasks)
        coef = solve_ridge(self._augment(Xs, n_tasks), np.vstack(Ys), ridge=self.ridge, n_free=n_free)
        d = Xs[0].shape[1]
        w = coef[:d]
        k = w.shape[1]
        if n_free == 0:
            b = np.zeros((n_tasks, k), dtype=float)
        elif n_free == 1:
            b = np.repeat(coef[d:d + 1], n_tasks, axis=0)
        else:
            b = coef[d:]
        self._log("Pooled ridge fitted on %d datasets, %d samples in total", n_tasks, sum(x.shape[0] for x in Xs))
        return PooledParams(w=w, b=b)

    def map(self, X: Any, params: PooledParams) -> Any:
        p = cast(PooledParams, self._fitted(params))
        Xs = _as_tasks(X)
        if len(Xs) != p.b.shape[0]:
            raise DimensionMismatch(f"Fitted on {p.b.shape[0]} datasets but got {len(Xs)}")
        out: List[FloatArray] = [np.asarray(x, dtype=float) @ p.w + p.b[t] for t, x in enumerate(Xs)]
        return out if isinstance(X, (list, tuple)) else out[0]

    def get_model(self) -> Tuple[Any, Any]:
        if isinstance(self.params, PooledParams):
            return self.params.w.copy(), "shared regression weights (features x targets)"
        return super().get_model()


def _as_tasks(X: Any) -> List[np.ndarray]:
    if isinstance(X, (list, tuple)):
        return list(X)
    return [X]
