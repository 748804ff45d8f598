"""Foreign-key discovery.

For every ordered pair of distinct datasets (L, R), reports ``L.cL -> R.cR``
when ``R.cR`` is unique and the distinct values of ``L.cL`` are contained in
those of ``R.cR``. Only single columns are considered on both sides.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Tuple

from dpql.core.enums import Operation
from dpql.core.models import Dataset, ResultTable
from ..config import FOREIGN_KEYS_COLUMNS, FOREIGN_KEYS_TABLE
from ..testers import is_subset, is_unique
from . import qualified

logger = logging.getLogger(__name__)


class ForeignKeysDriver:
    """Find single-column inclusion dependencies onto unique columns."""

    operation = Operation.FIND_FOREIGN_KEYS

    def discover(self, datasets: Mapping[str, Dataset]) -> ResultTable:
        rows: List[Tuple[str, ...]] = []
        # (dataset, column) -> is_unique; the answer depends only on R.cR
        unique_cache: Dict[Tuple[str, str], bool] = {}

        for left_name, left in datasets.items():
            for right_name, right in datasets.items():
                if left_name == right_name:
                    continue
                for left_column in left.columns:
                    for right_column in right.columns:
                        cache_key = (right_name, right_column)
                        if cache_key not in unique_cache:
                            unique_cache[cache_key] = is_unique(right, [right_column])
                        if not unique_cache[cache_key]:
                            continue
                        if is_subset(left, [left_column], right, [right_column]):
                            rows.append(
                                (
                                    qualified(left_name, left_column),
                                    qualified(right_name, right_column),
                                )
                            )

        logger.debug("Foreign-key discovery found %d candidates", len(rows))
        return ResultTable(
            name=FOREIGN_KEYS_TABLE, columns=list(FOREIGN_KEYS_COLUMNS), rows=rows
        )
