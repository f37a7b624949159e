from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, cast

import numpy as np

from .base import Regressor
from ..core.config import RidgeConfig
from ..core.registry import register_method
from ..types import FloatArray
from ._common import ridge_lstsq


@dataclass
class LinearParams:
    w: np.ndarray  # (d, k)
    b: np.ndarray  # (k,)


@register_method("ridge")
class RidgeRegressor(Regressor):
    """Linear regressor Y ≈ X W + b fitted by (ridge) least squares.

    The intercept is never regularized. Every design column is a separate
    target; map returns one prediction column per target.
    """

    config_cls = RidgeConfig

    def __init__(self, ridge: float = 0.0, fit_intercept: bool = True, verbose: bool = False) -> None:
        super().__init__(ridge=ridge, fit_intercept=fit_intercept, verbose=verbose)
        self.ridge = float(self.config.ridge)
        self.fit_intercept = bool(self.config.fit_intercept)

    def estimate(self, X: FloatArray, Y: FloatArray) -> LinearParams:
        X = np.asarray(X, dtype=float)
        Y = self._targets(X, Y)
        w, b = ridge_lstsq(X, Y, ridge=self.ridge, fit_intercept=self.fit_intercept)
        return LinearParams(w=w, b=b)

    def map(self, X: FloatArray, params: LinearParams) -> FloatArray:
        p = cast(LinearParams, self._fitted(params))
        return cast(FloatArray, np.asarray(X, dtype=float) @ p.w + p.b)

    def get_model(self) -> Tuple[Any, Any]:
        if isinstance(self.params, LinearParams):
            return self.params.w.copy(), "regression weights (features x targets)"
        if isinstance(self.params, list) and all(isinstance(p, LinearParams) for p in self.params):
            return [p.w.copy() for p in self.params], "regression weights per dataset"
        return super().get_model()
