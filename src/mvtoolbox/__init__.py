"""Uniform train/test orchestration for multivariate methods."""

from .models.base import Method, Regressor
from .models.linear import RidgeRegressor
from .models.gp import GPRegressor
from .models.scaling import Standardizer
from .models.transfer import PooledRidgeTransfer
from .data.shapes import ShapeTracker
from .data.helpers import labeled, unlabeled, unique_rows, count_unique_rows
from .core.errors import (
    MethodError,
    DimensionMismatch,
    UnsupportedOperation,
    UnsupportedInverse,
    NotFittedError,
)
from .core.registry import register_method, get_method, list_methods, build_method

__all__ = [
    "Method",
    "Regressor",
    "RidgeRegressor",
    "GPRegressor",
    "Standardizer",
    "PooledRidgeTransfer",
    "ShapeTracker",
    "labeled",
    "unlabeled",
    "unique_rows",
    "count_unique_rows",
    "MethodError",
    "DimensionMismatch",
    "UnsupportedOperation",
    "UnsupportedInverse",
    "NotFittedError",
    "register_method",
    "get_method",
    "list_methods",
    "build_method",
]
