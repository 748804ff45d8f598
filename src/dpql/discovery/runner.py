"""Discovery driver registry and query runner.

This module orchestrates discovery:
- ALL_DRIVERS: One driver instance per operation
- execute_query(): Runs the driver for an operation over a snapshot
- run_query(): Classifies query text and executes it against a registry
- print_report(): Displays a QueryResult on the console
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from dpql.core.enums import Operation
from dpql.core.errors import EngineError
from dpql.core.models import Dataset, ParsedQuery, QueryResult
from dpql.core.query import classify_query
from dpql.core.registry import DatasetRegistry
from .config import NO_DATASETS_WARNING, no_results_warning, skipped_dataset_warning
from .drivers.foreign_keys import ForeignKeysDriver
from .drivers.functional_dependencies import FunctionalDependenciesDriver
from .drivers.unique_keys import UniqueKeysDriver
from .projection import validate_dataset

logger = logging.getLogger(__name__)


ALL_DRIVERS = [
    UniqueKeysDriver(),
    ForeignKeysDriver(),
    FunctionalDependenciesDriver(),
]


def _select_driver(operation: Optional[Operation]):
    drivers = {d.operation: d for d in ALL_DRIVERS}
    if operation in drivers:
        return drivers[operation]
    logger.debug("No driver for %r, falling back to %s", operation, Operation.default().value)
    return drivers[Operation.default()]


def _usable_datasets(
    datasets: Mapping[str, Dataset], warnings: List[str]
) -> Dict[str, Dataset]:
    """Keep datasets that pass validation; report the others as warnings."""
    usable: Dict[str, Dataset] = {}
    for name, dataset in datasets.items():
        try:
            validate_dataset(dataset)
        except EngineError as e:
            logger.warning("Refusing dataset %s: %s", name, e)
            warnings.append(skipped_dataset_warning(name, str(e)))
            continue
        usable[name] = dataset
    return usable


def execute_query(
    operation: Optional[Operation], datasets: Mapping[str, Dataset]
) -> QueryResult:
    """Run one discovery operation over a dataset snapshot.

    Args:
        operation: Operation to run. Anything outside the enum falls back to
            foreign-key discovery.
        datasets: Name -> dataset mapping, read but never modified.

    Returns:
        QueryResult with one table, or no tables and a warning when
        ``datasets`` is empty. Datasets with ragged rows are left out and
        reported in ``warnings``.

    Examples:
        >>> result = execute_query(Operation.FIND_FOREIGN_KEYS, {})
        >>> result.warnings
        ['No datasets loaded. Please upload CSV files first.']
    """
    warnings: List[str] = []

    if not datasets:
        warnings.append(NO_DATASETS_WARNING)
        return QueryResult(tables=[], warnings=warnings)

    usable = _usable_datasets(datasets, warnings)
    driver = _select_driver(operation)
    logger.info(
        "Running %s over %d datasets", driver.operation.value, len(usable)
    )
    table = driver.discover(usable)

    if not table.rows:
        warnings.append(no_results_warning(driver.operation))

    return QueryResult(tables=[table], warnings=warnings)


def run_query(query_text: str, registry: DatasetRegistry) -> tuple[ParsedQuery, QueryResult]:
    """Classify ``query_text`` and execute it against a registry snapshot.

    Raises:
        InputError: If ``query_text`` is empty.
    """
    parsed = classify_query(query_text)
    snapshot = registry.snapshot()
    return parsed, execute_query(parsed.operation, snapshot)


def print_report(result: QueryResult) -> None:
    """Print a query result to the console."""
    print(result.to_console())
