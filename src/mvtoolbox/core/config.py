from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MethodConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    verbose: bool = False


class RidgeConfig(MethodConfig):
    ridge: float = Field(default=0.0, ge=0.0)
    fit_intercept: bool = True


class PooledRidgeConfig(RidgeConfig):
    # one intercept per collection member on top of the shared weights
    task_intercepts: bool = True


class StandardizerConfig(MethodConfig):
    with_mean: bool = True
    with_std: bool = True


class GPRegressorConfig(MethodConfig):
    optimize: bool = True
    # budget of likelihood evaluations for the hyperparameter search
    max_evals: int = Field(default=100, ge=1)
    noise_level: float = Field(default=0.1, gt=0.0)
    length_scale: float = Field(default=1.0, gt=0.0)
    signal_variance: float = Field(default=1.0, gt=0.0)
