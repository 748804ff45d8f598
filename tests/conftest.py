"""Shared pytest fixtures: small datasets mirroring typical profiling scenarios."""

import pytest

from dpql.core.models import Dataset
from dpql.core.registry import DatasetRegistry


@pytest.fixture
def orders():
    """Orders{OrderID, CustomerID} referencing Customers."""
    return Dataset.from_rows(
        "Orders",
        ["OrderID", "CustomerID"],
        [[1, 10], [2, 10], [3, 20]],
    )


@pytest.fixture
def customers():
    """Customers{CustomerID, Name} with a unique CustomerID."""
    return Dataset.from_rows(
        "Customers",
        ["CustomerID", "Name"],
        [[10, "Ann"], [20, "Bo"]],
    )


@pytest.fixture
def conflicting():
    """T{A, B} where A = 1 maps to two different B values."""
    return Dataset.from_rows("T", ["A", "B"], [[1, "x"], [1, "y"]])


@pytest.fixture
def nulls():
    """N{A} holding two null cells."""
    return Dataset.from_rows("N", ["A"], [[None], [None]])


@pytest.fixture
def ragged():
    """Dataset breaking the one-cell-per-column invariant on row 1."""
    return Dataset(name="Bad", columns=("A", "B"), rows=(("1", "2"), ("3",)))


@pytest.fixture
def shop(orders, customers):  # pylint: disable=redefined-outer-name
    """Registry snapshot mapping with Orders first, then Customers."""
    return {"Orders": orders, "Customers": customers}


@pytest.fixture
def shop_registry(orders, customers):  # pylint: disable=redefined-outer-name
    """DatasetRegistry loaded with Orders and Customers."""
    registry = DatasetRegistry()
    registry.add("Orders", orders)
    registry.add("Customers", customers)
    return registry
