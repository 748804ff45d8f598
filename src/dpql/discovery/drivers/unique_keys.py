"""Unique-key discovery.

Reports every single column and every unordered column pair whose projected
values are pairwise distinct.
"""

from __future__ import annotations

from itertools import combinations
from typing import List, Mapping, Tuple

from dpql.core.enums import Operation
from dpql.core.models import Dataset, ResultTable
from ..config import MAX_ARITY, UNIQUE_KEYS_COLUMNS, UNIQUE_KEYS_TABLE
from ..projection import canonical_label
from ..testers import is_unique
from . import qualified


class UniqueKeysDriver:
    """Find candidate keys of arity one and two."""

    operation = Operation.FIND_UNIQUE_KEYS

    def discover(self, datasets: Mapping[str, Dataset]) -> ResultTable:
        """Test single columns first, then pairs ``(i, j)`` with ``i < j``.

        Args:
            datasets: Registry snapshot.

        Returns:
            ``UniqueKeys`` table with one ``<dataset>.<cols>`` row per key.
        """
        rows: List[Tuple[str, ...]] = []
        for name, dataset in datasets.items():
            for arity in range(1, MAX_ARITY + 1):
                for column_set in combinations(dataset.columns, arity):
                    if is_unique(dataset, column_set):
                        rows.append((qualified(name, canonical_label(column_set)),))
        return ResultTable(name=UNIQUE_KEYS_TABLE, columns=list(UNIQUE_KEYS_COLUMNS), rows=rows)
