"""Discovery configuration constants.

Table layouts, the arity limit and the user-facing warning texts live here so
drivers, the runner and the interfaces agree on them.
"""

from __future__ import annotations

from dpql.core.enums import Operation

# Column-sets are single columns or unordered pairs; larger combinations are
# not enumerated.
MAX_ARITY = 2

# Cell value used for None when building canonical keys. A null is an
# ordinary value equal to itself, and equal to an empty string cell.
NULL_SENTINEL = ""

# Separator between column names in display labels ("T.a, b").
LABEL_SEPARATOR = ", "


# ============================================================================
# RESULT TABLE LAYOUTS
# ============================================================================

UNIQUE_KEYS_TABLE = "UniqueKeys"
UNIQUE_KEYS_COLUMNS = ["Key"]

FOREIGN_KEYS_TABLE = "ForeignKeys"
FOREIGN_KEYS_COLUMNS = ["ForeignKey", "Key"]

DEPENDENCIES_TABLE = "FunctionalDependencies"
DEPENDENCIES_COLUMNS = ["Determinant", "Dependent"]


# ============================================================================
# WARNINGS
# ============================================================================

NO_DATASETS_WARNING = "No datasets loaded. Please upload CSV files first."


def no_results_warning(operation: Operation) -> str:
    """Warning emitted when a driver finds nothing.

    Examples:
        >>> no_results_warning(Operation.FIND_UNIQUE_KEYS)
        'No find unique keys found in the current datasets.'
    """
    return f"No {operation.label} found in the current datasets."


def skipped_dataset_warning(name: str, reason: str) -> str:
    return f"Dataset '{name}' skipped: {reason}"
