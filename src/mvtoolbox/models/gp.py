from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Tuple, cast

import numpy as np
import scipy.optimize as sci_opt
from sklearn.gaussian_process import GaussianProcessRegressor
from sklearn.gaussian_process.kernels import RBF, ConstantKernel, Kernel, WhiteKernel

from .base import Regressor
from ..core.config import GPRegressorConfig
from ..core.registry import register_method
from ..types import FloatArray

logger = logging.getLogger(__name__)


@dataclass
class GPParams:
    offset: float
    model: GaussianProcessRegressor
    log_hyper: np.ndarray


@register_method("gp")
class GPRegressor(Regressor):
    """Gaussian process regressor returning predictive mean and variance.

    Uses a squared-exponential kernel with one length scale per feature plus
    a noise term. Targets (first design column) are centered before fitting
    and the offset is added back to predictions. With ``optimize`` the kernel
    hyperparameters are chosen by maximizing the log marginal likelihood with
    L-BFGS-B, limited to ``max_evals`` likelihood evaluations; otherwise the
    initial hyperparameters are used as given.

    ``map`` returns a (n, 2) matrix: mean in the first column, variance in the
    second.
    """

    config_cls = GPRegressorConfig

    def __init__(
        self,
        optimize: bool = True,
        max_evals: int = 100,
        noise_level: float = 0.1,
        length_scale: float = 1.0,
        signal_variance: float = 1.0,
        verbose: bool = False,
    ) -> None:
        super().__init__(
            optimize=optimize,
            max_evals=max_evals,
            noise_level=noise_level,
            length_scale=length_scale,
            signal_variance=signal_variance,
            verbose=verbose,
        )
        cfg = cast(GPRegressorConfig, self.config)
        self.optimize = cfg.optimize
        self.max_evals = cfg.max_evals
        self.noise_level = cfg.noise_level
        self.length_scale = cfg.length_scale
        self.signal_variance = cfg.signal_variance

    def make_kernel(self, n_features: int) -> Kernel:
        se = ConstantKernel(self.signal_variance) * RBF(length_scale=np.full(max(1, n_features), self.length_scale))
        return se + WhiteKernel(noise_level=self.noise_level)

    def _minimize(self, obj_func: Callable[..., Any], initial_theta: np.ndarray, bounds: np.ndarray) -> Tuple[np.ndarray, float]:
        # obj_func returns (negative log marginal likelihood, gradient)
        res = sci_opt.minimize(
            obj_func,
            initial_theta,
            method="L-BFGS-B",
            jac=True,
            bounds=bounds,
            options={"maxfun": int(self.max_evals)},
        )
        if not res.success:
            logger.warning("GP hyperparameter search stopped early: %s", res.message)
        return res.x, float(res.fun)

    def estimate(self, X: FloatArray, Y: FloatArray) -> GPParams:
        X = np.asarray(X, dtype=float)
        targets = self._targets(X, Y)[:, 0]
        offset = float(np.mean(targets)) if targets.size else 0.0
        gp = GaussianProcessRegressor(
            kernel=self.make_kernel(X.shape[1]),
            optimizer=self._minimize if self.optimize else None,
            normalize_y=False,
        )
        gp.fit(X, targets - offset)
        self._log("GP fitted on %d samples, kernel %s", X.shape[0], gp.kernel_)
        return GPParams(offset=offset, model=gp, log_hyper=np.asarray(gp.kernel_.theta).copy())

    def map(self, X: FloatArray, params: GPParams) -> FloatArray:
        p = cast(GPParams, self._fitted(params))
        avg, std = p.model.predict(np.asarray(X, dtype=float), return_std=True)
        avg = np.asarray(avg).ravel() + p.offset
        variance = np.asarray(std).ravel() ** 2
        return cast(FloatArray, np.column_stack([avg, variance]))

    def get_model(self) -> Tuple[Any, Any]:
        if isinstance(self.params, GPParams):
            return self.params.model.kernel_, "fitted covariance function"
        return super().get_model()
