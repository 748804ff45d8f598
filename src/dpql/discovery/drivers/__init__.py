"""Discovery drivers base interface.

A driver enumerates candidate column-sets over a registry snapshot, applies
the testers and returns one ResultTable. Drivers are pure: they read the
snapshot, never mutate it, and iterate datasets in mapping order and columns
in declared order, so repeated runs give identical output.

To implement a new driver:

1. Create a new file in this directory (e.g. `my_driver.py`)
2. Define a class with an ``operation`` attribute and a ``discover()`` method
3. Add an instance to ALL_DRIVERS in runner.py

Example:
    ```python
    from typing import Mapping
    from dpql.core.enums import Operation
    from dpql.core.models import Dataset, ResultTable

    class MyDriver:
        operation = Operation.FIND_UNIQUE_KEYS

        def discover(self, datasets: Mapping[str, Dataset]) -> ResultTable:
            return ResultTable(name="Mine", columns=["Key"], rows=[])
    ```
"""

from __future__ import annotations

from typing import Mapping, Protocol

from dpql.core.enums import Operation
from dpql.core.models import Dataset, ResultTable


class DiscoveryDriver(Protocol):
    """Protocol defining the interface for discovery drivers.

    Attributes:
        operation: The operation this driver answers.

    Methods:
        discover: Enumerate candidates over ``datasets`` and return the hits.
    """

    operation: Operation

    def discover(self, datasets: Mapping[str, Dataset]) -> ResultTable:
        """Run discovery.

        Args:
            datasets: Name -> dataset snapshot. Every dataset is assumed to
                have passed ``validate_dataset``.

        Returns:
            A ResultTable, possibly with no rows.
        """
        ...


def qualified(dataset_name: str, column_label: str) -> str:
    """Format ``<dataset>.<columns>`` for result rows."""
    return f"{dataset_name}.{column_label}"


__all__ = ["DiscoveryDriver", "qualified"]
