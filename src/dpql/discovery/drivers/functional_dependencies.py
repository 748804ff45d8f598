"""Functional-dependency discovery.

Tests every ordered pair of distinct columns within each dataset. Both
directions are reported independently, so value-identical columns appear as
``A -> B`` and ``B -> A``.
"""

from __future__ import annotations

from typing import List, Mapping, Tuple

from dpql.core.enums import Operation
from dpql.core.models import Dataset, ResultTable
from ..config import DEPENDENCIES_COLUMNS, DEPENDENCIES_TABLE
from ..testers import is_fd
from . import qualified


class FunctionalDependenciesDriver:
    """Find single-column functional dependencies."""

    operation = Operation.FIND_DEPENDENCIES

    def discover(self, datasets: Mapping[str, Dataset]) -> ResultTable:
        rows: List[Tuple[str, ...]] = []
        for name, dataset in datasets.items():
            for determinant in dataset.columns:
                for dependent in dataset.columns:
                    if determinant == dependent:
                        continue
                    if is_fd(dataset, [determinant], [dependent]):
                        rows.append((qualified(name, determinant), qualified(name, dependent)))
        return ResultTable(
            name=DEPENDENCIES_TABLE, columns=list(DEPENDENCIES_COLUMNS), rows=rows
        )
