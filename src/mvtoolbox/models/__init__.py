from .base import Method, Regressor
from .linear import RidgeRegressor, LinearParams
from .gp import GPRegressor, GPParams
from .scaling import Standardizer
from .transfer import PooledRidgeTransfer, PooledParams

__all__ = [
    "Method",
    "Regressor",
    "RidgeRegressor",
    "LinearParams",
    "GPRegressor",
    "GPParams",
    "Standardizer",
    "PooledRidgeTransfer",
    "PooledParams",
]
