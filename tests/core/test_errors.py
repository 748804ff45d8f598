"""Tests for the exception hierarchy."""

from dpql.core.errors import (
    DatasetNotFoundError,
    DPQLError,
    EngineError,
    InputError,
    RaggedDatasetError,
)


def test_input_errors_are_value_errors():
    assert issubclass(InputError, ValueError)
    assert issubclass(InputError, DPQLError)
    assert issubclass(DatasetNotFoundError, KeyError)
    assert issubclass(DatasetNotFoundError, InputError)


def test_engine_errors():
    assert issubclass(RaggedDatasetError, EngineError)
    assert not issubclass(EngineError, InputError)
    err = RaggedDatasetError("T", 4, 3, 2)
    assert str(err) == "row 4 has 2 cells, expected 3 (dataset 'T')"
