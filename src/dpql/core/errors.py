"""Exception hierarchy for DPQL tools.

Two families are distinguished:

- ``InputError``: problems with what the caller supplied (no CSV content,
  unknown dataset, empty query). Raised by the registry, loader and classifier,
  never by the discovery engine itself.
- ``EngineError``: a dataset that breaks the rectangular-rows invariant, or a
  projection over a column the dataset does not have. The engine refuses such
  datasets instead of producing silently wrong results.
"""

from __future__ import annotations

from typing import Optional


class DPQLError(Exception):
    """Base class for all package errors."""


class InputError(DPQLError, ValueError):
    """Invalid or missing caller input."""


class DatasetNotFoundError(InputError, KeyError):
    """Requested dataset name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Dataset not found: {name}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class EngineError(DPQLError, RuntimeError):
    """A dataset cannot take part in discovery."""


class RaggedDatasetError(EngineError):
    """A row's length differs from the dataset's column count."""

    def __init__(
        self,
        dataset_name: str,
        row_index: int,
        expected: int,
        actual: int,
        message: Optional[str] = None,
    ) -> None:
        self.dataset_name = dataset_name
        self.row_index = row_index
        self.expected = expected
        self.actual = actual
        super().__init__(
            message
            or f"row {row_index} has {actual} cells, expected {expected} "
            f"(dataset '{dataset_name}')"
        )


__all__ = [
    "DPQLError",
    "InputError",
    "DatasetNotFoundError",
    "EngineError",
    "RaggedDatasetError",
]
