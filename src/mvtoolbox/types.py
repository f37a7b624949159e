from __future__ import annotations

from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Preferred float array type for public APIs
FloatArray = NDArray[np.float64]

# One observations x features matrix (leading axis = rows, any trailing rank)
Dataset = np.ndarray
# One dataset per task/subject/fold; never nested
DatasetCollection = Union[List[np.ndarray], Tuple[np.ndarray, ...]]
DataLike = Union[Dataset, DatasetCollection]

Shape = Tuple[int, ...]
ShapeLike = Union[Shape, Sequence[Shape]]


def is_collection(data: object) -> bool:
    """True when ``data`` is a DatasetCollection rather than a single Dataset."""
    return isinstance(data, (list, tuple))
