from __future__ import annotations

from typing import cast

import numpy as np
from sklearn.preprocessing import StandardScaler

from .base import Method
from ..core.config import StandardizerConfig
from ..core.registry import register_method
from ..types import FloatArray


@register_method("standardizer")
class Standardizer(Method):
    """Column-wise z-scoring with an exact inverse.

    The design is ignored. Output has the size of the input, so ``test`` and
    ``untest`` hand results back in the caller's original shape.
    """

    config_cls = StandardizerConfig

    def __init__(self, with_mean: bool = True, with_std: bool = True, verbose: bool = False) -> None:
        super().__init__(with_mean=with_mean, with_std=with_std, verbose=verbose)
        self.with_mean = bool(self.config.with_mean)
        self.with_std = bool(self.config.with_std)

    def estimate(self, X: FloatArray, Y: FloatArray | None = None) -> StandardScaler:
        scaler = StandardScaler(with_mean=self.with_mean, with_std=self.with_std)
        return scaler.fit(np.asarray(X, dtype=float))

    def map(self, X: FloatArray, params: StandardScaler) -> FloatArray:
        scaler = cast(StandardScaler, self._fitted(params))
        return cast(FloatArray, scaler.transform(np.asarray(X, dtype=float)))

    def unmap(self, Y: FloatArray, params: StandardScaler) -> FloatArray:
        scaler = cast(StandardScaler, self._fitted(params))
        return cast(FloatArray, scaler.inverse_transform(np.asarray(Y, dtype=float)))
