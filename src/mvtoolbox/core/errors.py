from __future__ import annotations


class MethodError(Exception):
    """Base class for errors raised by the train/test machinery."""


class DimensionMismatch(MethodError, ValueError):
    """Datasets in a collection disagree in size where they must agree.

    Raised for transfer learners fed members with different feature counts and
    for collections whose lengths do not line up (data vs design, data vs
    fitted params).
    """


class UnsupportedOperation(MethodError, NotImplementedError):
    """A method declines to perform a requested operation."""


class UnsupportedInverse(UnsupportedOperation):
    """The inverse mapping does not exist for this method."""


class NotFittedError(MethodError, RuntimeError):
    """A method was applied before it was trained."""
