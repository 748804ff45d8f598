"""Tests for core data models and enums."""

import json

import pytest

from dpql.core.enums import Operation
from dpql.core.models import Dataset, ParsedQuery, QueryResult, ResultTable


def test_operation_values_and_default():
    assert [op.value for op in Operation] == [
        "find_unique_keys",
        "find_foreign_keys",
        "find_dependencies",
    ]
    assert Operation.default() is Operation.FIND_FOREIGN_KEYS
    assert Operation("find_dependencies") is Operation.FIND_DEPENDENCIES
    assert Operation.FIND_FOREIGN_KEYS.label == "find foreign keys"
    assert Operation.FIND_UNIQUE_KEYS.select_columns == ["UniqueKey"]


def test_dataset_from_rows_converts_cells():
    ds = Dataset.from_rows("T", ["a", "b"], [[1, None], [2.5, "x"]], source="t.csv")
    assert ds.columns == ("a", "b")
    assert ds.rows == (("1", None), ("2.5", "x"))
    assert ds.row_count == 2
    assert ds.is_rectangular() is True
    assert ds.metadata() == {
        "name": "T",
        "columns": ["a", "b"],
        "rowCount": 2,
        "source": "t.csv",
    }


def test_dataset_is_immutable(customers):
    with pytest.raises(AttributeError):
        customers.name = "Other"  # type: ignore[misc]


def test_dataset_ragged_detection(ragged):
    assert ragged.is_rectangular() is False


def test_parsed_query_for_operation():
    parsed = ParsedQuery.for_operation(Operation.FIND_FOREIGN_KEYS)
    assert parsed.select_columns == ["ForeignKey", "Key"]


@pytest.fixture
def fk_result():
    return QueryResult(
        tables=[
            ResultTable(
                name="ForeignKeys",
                columns=["ForeignKey", "Key"],
                rows=[("Orders.CustomerID", "Customers.CustomerID")],
            )
        ],
        warnings=["Dataset 'Bad' skipped: row 1 has 1 cells, expected 2"],
    )


def test_query_result_to_dict_and_json(fk_result):  # pylint: disable=redefined-outer-name
    data = json.loads(fk_result.to_json())
    assert data == fk_result.to_dict()
    assert data["tables"][0]["rows"] == [["Orders.CustomerID", "Customers.CustomerID"]]
    assert data["warnings"] == ["Dataset 'Bad' skipped: row 1 has 1 cells, expected 2"]


def test_query_result_summary(fk_result):  # pylint: disable=redefined-outer-name
    summary = fk_result.summary()
    assert "Tables: 1 (ForeignKeys)" in summary
    assert "Rows: 1" in summary
    assert "Warnings: 1" in summary


def test_query_result_markdown(fk_result):  # pylint: disable=redefined-outer-name
    md = fk_result.to_markdown()
    assert "## ForeignKeys" in md
    assert "| ForeignKey | Key |" in md
    assert "| Orders.CustomerID | Customers.CustomerID |" in md
    assert "## ⚠️ Warnings" in md


def test_query_result_markdown_escapes_pipes():
    result = QueryResult(tables=[ResultTable(name="U", columns=["Key"], rows=[("a|b",)])])
    assert "a\\|b" in result.to_markdown()


def test_empty_query_result():
    result = QueryResult(tables=[], warnings=["No datasets loaded. Please upload CSV files first."])
    assert result.is_empty() is True
    assert result.row_count() == 0
    assert "Tables: 0 (none)" in result.to_console()
