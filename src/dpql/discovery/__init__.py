"""Dependency discovery engine.

This package finds structural relationships among in-memory datasets:

- **Projection**: project(), validate_dataset() - canonical row keys
- **Testers**: is_unique(), is_subset(), is_fd()
- **Drivers**: unique-key, foreign-key and functional-dependency discovery
- **Runner**: execute_query(), run_query(), print_report()

Usage:
    >>> from dpql.core import Dataset, Operation
    >>> from dpql.discovery import execute_query
    >>> customers = Dataset.from_rows("Customers", ["CustomerID"], [[10], [20]])
    >>> execute_query(Operation.FIND_UNIQUE_KEYS, {"Customers": customers}).tables[0].rows
    [('Customers.CustomerID',)]
"""

from __future__ import annotations

from .projection import canonical_label, project, validate_dataset
from .runner import ALL_DRIVERS, execute_query, print_report, run_query
from .testers import is_fd, is_subset, is_unique

__all__ = [
    "project",
    "validate_dataset",
    "canonical_label",
    "is_unique",
    "is_subset",
    "is_fd",
    "ALL_DRIVERS",
    "execute_query",
    "run_query",
    "print_report",
]
