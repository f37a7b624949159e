from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple

import numpy as np
from joblib import Parallel, delayed

from ..core.config import MethodConfig
from ..core.errors import DimensionMismatch, NotFittedError, UnsupportedInverse
from ..data import helpers
from ..data.shapes import flatten, n_features, record, restore, restore_each
from ..types import DataLike, FloatArray, ShapeLike, is_collection

logger = logging.getLogger(__name__)

MapFn = Callable[[Any, Any], Any]


class Method(ABC):
    """Base class for multivariate methods.

    Subclasses implement ``estimate`` (fit params from a 2-D data matrix and a
    2-D design matrix) and ``map`` (apply params to a 2-D data matrix), and may
    implement ``unmap`` for the inverse direction. ``train``/``test``/``untest``
    take care of the data handling around these: flattening to matrices,
    fitting every member of a dataset collection on its own, or handing the
    whole collection to ``estimate`` when the method is a transfer learner, and
    folding results back into the shape of the input.

    Fitted state lives in ``params`` (a list with one entry per member when a
    non-transfer method was trained on a collection), ``indims`` and
    ``outdims`` (recorded data/design shapes). Every ``train`` call replaces
    all three.
    """

    #: transfer learners are fitted jointly over a collection
    transfer: bool = False
    config_cls: type[MethodConfig] = MethodConfig

    def __init__(self, **options: Any) -> None:
        self.config = self.config_cls(**options)
        self.verbose = bool(self.config.verbose)
        self.params: Any = None
        self.indims: Optional[ShapeLike] = None
        self.outdims: Optional[ShapeLike] = None

    # Contract -----------------------------------------------------------------
    @abstractmethod
    def estimate(self, X: Any, Y: Any) -> Any:
        """Fit and return params. Transfer learners receive lists of matrices."""

    @abstractmethod
    def map(self, X: Any, params: Any) -> Any:
        """Apply ``params`` to ``X``."""

    def unmap(self, Y: Any, params: Any) -> Any:
        # sometimes the inverse mapping does not exist
        raise UnsupportedInverse(f"Inverse mapping does not exist for {type(self).__name__}")

    def is_transfer(self) -> bool:
        return bool(type(self).transfer)

    def get_model(self) -> Tuple[Any, Any]:
        """Return ``(model, description)``; empty unless a subclass knows better."""
        if self.verbose:
            logger.info("Don't know how to return a model for %s; returning empty model and description", type(self).__name__)
        return [], []

    # Orchestration ------------------------------------------------------------
    def train(self, data: DataLike, design: DataLike) -> "Method":
        params, indims, outdims = self._train(data, design)
        # commit only once everything has been estimated
        self.params, self.indims, self.outdims = params, indims, outdims
        return self

    def test(self, data: DataLike, n_jobs: Optional[int] = None) -> DataLike:
        self._check_fitted()
        return self._apply(data, self.params, self.indims, self.map, n_jobs)

    def untest(self, data: DataLike, n_jobs: Optional[int] = None) -> DataLike:
        """Invert the mapping."""
        self._check_fitted()
        return self._apply(data, self.params, self.indims, self.unmap, n_jobs)

    def _train(self, data: DataLike, design: DataLike) -> Tuple[Any, Any, Any]:
        if is_collection(data) and not self.is_transfer():
            _check_paired(data, design, "design")
            self._log("Training %s independently on %d datasets", type(self).__name__, len(data))
            fitted = [self._train(d, y) for d, y in zip(data, design)]
            return [f[0] for f in fitted], [f[1] for f in fitted], [f[2] for f in fitted]

        if is_collection(data):
            _check_paired(data, design, "design")
            counts = sorted({n_features(d) for d in data})
            if len(counts) > 1:
                raise DimensionMismatch(
                    f"Datasets must have the same number of features for transfer learning (got {counts})"
                )
            self._log("Training transfer learner %s jointly on %d datasets", type(self).__name__, len(data))

        indims = record(data)
        outdims = record(design)
        params = self.estimate(flatten(data), flatten(design))
        return params, indims, outdims

    def _apply(self, data: DataLike, params: Any, indims: Any, op: MapFn, n_jobs: Optional[int] = None) -> DataLike:
        if is_collection(data) and not self.is_transfer():
            if not isinstance(params, list) or len(params) != len(data):
                n_params = len(params) if isinstance(params, list) else 1
                raise DimensionMismatch(f"Got {len(data)} datasets but {n_params} fitted parameter sets")
            shapes = indims if isinstance(indims, list) and len(indims) == len(data) else [None] * len(data)
            if n_jobs is not None and len(data) > 1:
                out = Parallel(n_jobs=n_jobs, prefer="threads")(
                    delayed(self._apply)(d, p, s, op) for d, p, s in zip(data, params, shapes)
                )
            else:
                out = [self._apply(d, p, s, op) for d, p, s in zip(data, params, shapes)]
            return list(out)

        flat = flatten(data)
        result = op(flat, params)
        if is_collection(data):
            if not isinstance(result, (list, tuple)) or len(result) != len(flat):
                # not one result per member; hand it back as mapped
                return result
            if not isinstance(indims, list) or len(indims) != len(flat):
                return list(result)
            return restore_each(result, [_with_rows(s, x) for s, x in zip(indims, flat)])
        if isinstance(indims, list):
            # trained on a collection, applied to a single dataset
            indims = indims[0] if len(indims) == 1 else None
        return restore(result, _with_rows(indims, flat))

    def _check_fitted(self) -> None:
        if self.indims is None:
            raise NotFittedError(f"{type(self).__name__} is not trained")

    def _log(self, msg: str, *args: Any) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    def _fitted(self, params: Any) -> Any:
        if params is None:
            raise NotFittedError(f"{type(self).__name__} not fitted")
        return params

    # Helpers operating on datasets --------------------------------------------
    labeled = staticmethod(helpers.labeled)
    unlabeled = staticmethod(helpers.unlabeled)
    unique_rows = staticmethod(helpers.unique_rows)
    count_unique_rows = staticmethod(helpers.count_unique_rows)


class Regressor(Method):
    """Base for methods predicting a design (target) matrix from data."""

    @staticmethod
    def _targets(X: FloatArray, Y: Any) -> FloatArray:
        Y = np.asarray(Y, dtype=float)
        if Y.ndim == 1:
            Y = Y.reshape(-1, 1)
        if X.shape[0] != Y.shape[0]:
            raise ValueError(f"Data has {X.shape[0]} rows but design has {Y.shape[0]}")
        return Y


def _check_paired(data: DataLike, design: Any, what: str) -> None:
    if not is_collection(design) or len(design) != len(data):
        n_other = len(design) if is_collection(design) else 1
        raise DimensionMismatch(f"Got {len(data)} datasets but {n_other} {what} entries")


def _with_rows(shape: Any, X: Any) -> Any:
    """Recorded shape with its leading axis set to the rows being mapped."""
    if shape is None or len(shape) == 0:
        return shape
    return (int(np.shape(X)[0]),) + tuple(shape[1:])
