"""Shape bookkeeping around estimation and mapping.

Methods only ever see 2-D ``(rows, features)`` matrices. The original shape of
every input is recorded before flattening so that results can be folded back
into it afterwards. Restoring is best effort: when a mapping changes the number
of elements (a regressor emitting mean and variance columns, say) the flat
result is returned as is.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from ..types import DataLike, Shape, ShapeLike, is_collection

logger = logging.getLogger(__name__)


def record(data: DataLike) -> ShapeLike:
    """Return the shape of a dataset, or the list of member shapes of a collection."""
    if is_collection(data):
        return [tuple(np.shape(d)) for d in data]
    return tuple(np.shape(data))


def flatten(data: DataLike):
    """Collapse trailing dimensions into columns, keeping rows.

    1-D input becomes a single column. Collections are flattened memberwise and
    returned as a list.
    """
    if is_collection(data):
        return [flatten(d) for d in data]
    X = np.asarray(data)
    if X.ndim == 0:
        return X.reshape(1, 1)
    if X.ndim == 1:
        return X.reshape(-1, 1)
    return X.reshape(X.shape[0], int(np.prod(X.shape[1:])))


def restore(flat, shape: Shape):
    """Reshape ``flat`` to ``shape`` when their element counts agree.

    On a size mismatch the input is returned unchanged; this is not an error.
    """
    out = np.asarray(flat)
    if shape is None:
        return out
    if out.size == int(np.prod(shape)) and (out.size > 0 or _trailing(out.shape) == _trailing(shape)):
        return out.reshape(shape)
    logger.debug("Keeping flat result of shape %s (recorded shape %s)", out.shape, tuple(shape))
    return out


def _trailing(shape) -> int:
    # elements per row; decides empty results, where the total is always zero
    return int(np.prod(tuple(shape)[1:])) if len(shape) > 1 else 1


def restore_each(flats: Sequence, shapes: Sequence[Shape]) -> List[np.ndarray]:
    if len(flats) != len(shapes):
        # nothing to pair shapes with; leave every member as mapped
        logger.debug("Got %d results for %d recorded shapes; not restoring", len(flats), len(shapes))
        return [np.asarray(f) for f in flats]
    return [restore(f, s) for f, s in zip(flats, shapes)]


def n_features(data) -> int:
    """Feature count of a dataset after flattening."""
    return int(flatten(data).shape[1])


class ShapeTracker:
    """Namespace bundling the shape helpers."""

    record = staticmethod(record)
    flatten = staticmethod(flatten)
    restore = staticmethod(restore)
    restore_each = staticmethod(restore_each)
    n_features = staticmethod(n_features)
