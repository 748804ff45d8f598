"""Tests for DatasetRegistry."""

import threading

import pytest

from dpql.core.errors import DatasetNotFoundError, InputError
from dpql.core.models import Dataset
from dpql.core.registry import DatasetRegistry


def test_add_and_list_metadata(shop_registry):
    assert shop_registry.names() == ["Orders", "Customers"]
    assert len(shop_registry) == 2
    assert "Orders" in shop_registry
    meta = shop_registry.list_metadata()
    assert meta[0] == {
        "name": "Orders",
        "columns": ["OrderID", "CustomerID"],
        "rowCount": 3,
        "source": None,
    }


def test_add_replaces_whole_dataset(shop_registry):
    replacement = Dataset.from_rows("Orders", ["OrderID"], [[9]])
    shop_registry.add("Orders", replacement)
    assert shop_registry.get("Orders") is replacement
    assert shop_registry.names() == ["Orders", "Customers"]


def test_add_requires_name(orders):
    with pytest.raises(InputError, match="Dataset name is required"):
        DatasetRegistry().add("  ", orders)


def test_remove(shop_registry, orders):
    assert shop_registry.remove("Orders") is orders
    assert shop_registry.names() == ["Customers"]


def test_remove_missing_raises(shop_registry):
    with pytest.raises(DatasetNotFoundError) as excinfo:
        shop_registry.remove("Nope")
    assert str(excinfo.value) == "Dataset not found: Nope"
    assert excinfo.value.name == "Nope"


def test_remove_all(shop_registry):
    assert shop_registry.remove_all() == ["Orders", "Customers"]
    assert len(shop_registry) == 0
    assert shop_registry.remove_all() == []


def test_snapshot_is_isolated_from_later_mutation(shop_registry, conflicting):
    snapshot = shop_registry.snapshot()
    shop_registry.add("T", conflicting)
    shop_registry.remove("Orders")
    assert list(snapshot) == ["Orders", "Customers"]


def test_snapshot_is_read_only(shop_registry, conflicting):
    snapshot = shop_registry.snapshot()
    with pytest.raises(TypeError):
        snapshot["T"] = conflicting  # type: ignore[index]


def test_concurrent_adds_are_all_kept():
    registry = DatasetRegistry()

    def add(i):
        registry.add(f"ds{i}", Dataset.from_rows(f"ds{i}", ["a"], [[i]]))

    threads = [threading.Thread(target=add, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(registry.snapshot()) == 20
