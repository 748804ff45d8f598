"""Tests for CSV ingestion."""

import pytest

from dpql.core.errors import InputError
from dpql.ingestion import dataset_name_from_filename, load_csv_file, parse_csv


def test_parse_csv_keeps_values_as_strings():
    ds = parse_csv("id,amount,flag\n001,1.50,NULL\n2,3,NaN\n", "T")
    assert ds.name == "T"
    assert ds.columns == ("id", "amount", "flag")
    assert ds.rows == (("001", "1.50", "NULL"), ("2", "3", "NaN"))


def test_parse_csv_empty_cells_are_empty_strings():
    ds = parse_csv("a,b\n1,\n,2\n", "T")
    assert ds.rows == (("1", ""), ("", "2"))


def test_parse_csv_short_row_cells_are_none():
    ds = parse_csv("a,b,c\n1\n2,3\n4,5,6\n", "T")
    assert ds.rows == (("1", None, None), ("2", "3", None), ("4", "5", "6"))


def test_parse_csv_short_row_after_blank_line():
    ds = parse_csv("a,b\n\n1\n\n2,\n", "T")
    assert ds.rows == (("1", None), ("2", ""))


def test_parse_csv_skips_blank_lines():
    ds = parse_csv("a,b\n1,2\n\n3,4\n", "T")
    assert ds.row_count == 2


def test_parse_csv_header_only():
    ds = parse_csv("a,b\n", "T")
    assert ds.columns == ("a", "b")
    assert ds.rows == ()


def test_parse_csv_quoted_fields():
    ds = parse_csv('name,note\n"Doe, Jane","said ""hi"""\n', "T")
    assert ds.rows == (("Doe, Jane", 'said "hi"'),)


def test_parse_csv_strips_bom():
    ds = parse_csv("\ufeffid,v\n1,2\n", "T")
    assert ds.columns == ("id", "v")


def test_parse_csv_custom_delimiter():
    ds = parse_csv("a;b\n1;2\n", "T", delimiter=";")
    assert ds.rows == (("1", "2"),)


def test_parse_csv_sets_source():
    assert parse_csv("a\n1\n", "T", source="t.csv").source == "t.csv"


@pytest.mark.parametrize("text", ["", "   \n  "])
def test_parse_csv_empty_content(text):
    with pytest.raises(InputError, match="No CSV content provided"):
        parse_csv(text, "T")


def test_parse_csv_duplicate_header():
    with pytest.raises(InputError, match="duplicate columns: a"):
        parse_csv("a,b,a\n1,2,3\n", "T")


def test_parse_csv_too_many_fields():
    with pytest.raises(InputError, match="Failed to parse CSV"):
        parse_csv("a,b\n1,2\n3,4,5\n", "T")


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("orders.csv", "orders"),
        ("path/to/customers.data.csv", "customers.data"),
        ("noext", "noext"),
        (".hidden", ".hidden"),
        (None, "dataset"),
        ("", "dataset"),
    ],
)
def test_dataset_name_from_filename(filename, expected):
    assert dataset_name_from_filename(filename) == expected


def test_load_csv_file(tmp_path):
    path = tmp_path / "orders.csv"
    path.write_text("OrderID,CustomerID\n1,10\n2,10\n", encoding="utf-8")
    ds = load_csv_file(path)
    assert ds.name == "orders"
    assert ds.source == "orders.csv"
    assert ds.row_count == 2


def test_load_csv_file_with_name(tmp_path):
    path = tmp_path / "orders.csv"
    path.write_text("a\n1\n", encoding="utf-8")
    assert load_csv_file(path, name=" Orders ").name == "Orders"


def test_load_csv_file_missing(tmp_path):
    with pytest.raises(InputError, match="CSV file not found"):
        load_csv_file(tmp_path / "missing.csv")
