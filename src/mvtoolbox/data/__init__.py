from .shapes import ShapeTracker, record, flatten, restore, restore_each, n_features
from .helpers import labeled, unlabeled, unique_rows, count_unique_rows

__all__ = [
    "ShapeTracker",
    "record",
    "flatten",
    "restore",
    "restore_each",
    "n_features",
    "labeled",
    "unlabeled",
    "unique_rows",
    "count_unique_rows",
]
