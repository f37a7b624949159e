from .errors import (
    MethodError,
    DimensionMismatch,
    UnsupportedOperation,
    UnsupportedInverse,
    NotFittedError,
)
from .registry import register_method, get_method, list_methods, build_method

__all__ = [
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
