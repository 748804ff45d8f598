"""Value projection.

A projection reads the cells at a column-set's positions from every row of a
dataset and turns each row into a canonical key. Keys are tuples of strings
compared structurally, so a cell containing any separator character can never
make two different rows look equal.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from dpql.core.errors import EngineError, RaggedDatasetError
from dpql.core.models import Dataset
from .config import LABEL_SEPARATOR, NULL_SENTINEL

logger = logging.getLogger(__name__)

CanonicalKey = Tuple[str, ...]


def validate_dataset(dataset: Dataset) -> None:
    """Check that ``dataset`` can take part in discovery.

    Raises:
        EngineError: If column names repeat.
        RaggedDatasetError: On the first row whose length is not the column count.
    """
    if len(set(dataset.columns)) != len(dataset.columns):
        raise EngineError(f"dataset '{dataset.name}' has duplicate column names")
    width = len(dataset.columns)
    for i, row in enumerate(dataset.rows):
        if len(row) != width:
            raise RaggedDatasetError(dataset.name, i, width, len(row))


def column_positions(dataset: Dataset, columns: Sequence[str]) -> List[int]:
    """Resolve column names to positions, raising EngineError on unknown names."""
    positions = []
    for column in columns:
        try:
            positions.append(dataset.column_index(column))
        except ValueError:
            raise EngineError(
                f"column '{column}' not found in dataset '{dataset.name}'"
            ) from None
    return positions


def canonical_cell(value: object) -> str:
    if value is None:
        return NULL_SENTINEL
    return str(value)


def project(dataset: Dataset, columns: Sequence[str]) -> List[CanonicalKey]:
    """Project ``dataset`` onto ``columns``.

    Args:
        dataset: Source dataset.
        columns: Ordered column-set.

    Returns:
        One canonical key per row, in row order.

    Raises:
        EngineError: If a column is unknown or the dataset is ragged.

    Examples:
        >>> ds = Dataset.from_rows("T", ["A", "B"], [[1, "x"], [None, "y"]])
        >>> project(ds, ["B", "A"])
        [('x', '1'), ('y', '')]
    """
    validate_dataset(dataset)
    positions = column_positions(dataset, columns)
    return [tuple(canonical_cell(row[p]) for p in positions) for row in dataset.rows]


def canonical_label(columns: Sequence[str]) -> str:
    """Display form of a column-set, e.g. ``"a, b"``."""
    return LABEL_SEPARATOR.join(columns)
