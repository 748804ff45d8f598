"""Dependency testers over column projections.

- is_unique: candidate key (unique column combination) check
- is_subset: inclusion dependency check between two datasets
- is_fd: functional dependency check within one dataset
"""

from __future__ import annotations

from typing import Dict, Sequence

from dpql.core.models import Dataset
from .projection import CanonicalKey, project


def is_unique(dataset: Dataset, columns: Sequence[str]) -> bool:
    """True if no two rows share the same projected value.

    A dataset with no rows is unique on every column-set.
    """
    keys = project(dataset, columns)
    return len(set(keys)) == len(keys)


def is_subset(
    left: Dataset,
    left_columns: Sequence[str],
    right: Dataset,
    right_columns: Sequence[str],
) -> bool:
    """True if every distinct left value occurs among the right values.

    This is set containment: a value repeated on the left needs only one
    occurrence on the right.
    """
    right_keys = set(project(right, right_columns))
    for key in project(left, left_columns):
        if key not in right_keys:
            return False
    return True


def is_fd(
    dataset: Dataset,
    determinant: Sequence[str],
    dependent: Sequence[str],
) -> bool:
    """True if equal determinant values always come with equal dependent values.

    Examples:
        >>> t = Dataset.from_rows("T", ["A", "B"], [[1, "x"], [1, "y"]])
        >>> is_fd(t, ["A"], ["B"])
        False
    """
    seen: Dict[CanonicalKey, CanonicalKey] = {}
    for det_key, dep_key in zip(project(dataset, determinant), project(dataset, dependent)):
        first = seen.setdefault(det_key, dep_key)
        if first != dep_key:
            return False
    return True
