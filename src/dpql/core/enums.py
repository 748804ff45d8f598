"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum
from typing import List


class Operation(str, Enum):
    """Discovery operations understood by the engine.

    Values are strings to ease serialization and CLI interchange.
    """

    FIND_UNIQUE_KEYS = "find_unique_keys"
    FIND_FOREIGN_KEYS = "find_foreign_keys"
    FIND_DEPENDENCIES = "find_dependencies"

    @classmethod
    def default(cls) -> "Operation":
        """Operation used when a query matches no known pattern."""
        return cls.FIND_FOREIGN_KEYS

    @property
    def select_columns(self) -> List[str]:
        """Result columns produced by this operation."""
        return list(_SELECT_COLUMNS[self])

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``"find unique keys"``."""
        return self.value.replace("_", " ")


_SELECT_COLUMNS = {
    Operation.FIND_UNIQUE_KEYS: ("UniqueKey",),
    Operation.FIND_FOREIGN_KEYS: ("ForeignKey", "Key"),
    Operation.FIND_DEPENDENCIES: ("Determinant", "Dependent"),
}


__all__ = ["Operation"]
