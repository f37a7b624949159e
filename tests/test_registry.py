import pytest
from pydantic import ValidationError

from mvtoolbox.core.registry import build_method, get_method, list_methods
from mvtoolbox.models import GPRegressor, PooledRidgeTransfer, RidgeRegressor, Standardizer


def test_builtin_methods_registered():
    methods = list_methods()
    assert methods["gp"] is GPRegressor
    assert methods["ridge"] is RidgeRegressor
    assert methods["standardizer"] is Standardizer
    assert methods["pooled_ridge"] is PooledRidgeTransfer


def test_get_method_case_insensitive_and_unknown():
    assert get_method("GP") is GPRegressor
    with pytest.raises(KeyError):
        get_method("does-not-exist")


def test_build_method_passes_validated_options():
    m = build_method("gp", optimize=False, max_evals=5)
    assert isinstance(m, GPRegressor)
    assert m.optimize is False
    assert m.max_evals == 5
    assert build_method("pooled_ridge").is_transfer()


def test_invalid_options_rejected():
    with pytest.raises(ValidationError):
        RidgeRegressor(ridge=-1.0)
    with pytest.raises(ValidationError):
        GPRegressor(max_evals=0)
    with pytest.raises(TypeError):
        build_method("ridge", unknown=1)


def test_error_hierarchy():
    from mvtoolbox.core import errors

    assert issubclass(errors.DimensionMismatch, ValueError)
    assert issubclass(errors.UnsupportedInverse, errors.UnsupportedOperation)
    assert issubclass(errors.UnsupportedOperation, NotImplementedError)
    assert issubclass(errors.NotFittedError, RuntimeError)
    assert issubclass(errors.NotFittedError, errors.MethodError)
