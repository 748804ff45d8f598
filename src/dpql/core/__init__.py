"""Core types shared by the engine, the loaders and the interfaces."""

from .enums import Operation
from .errors import (
    DatasetNotFoundError,
    DPQLError,
    EngineError,
    InputError,
    RaggedDatasetError,
)
from .models import Dataset, ParsedQuery, QueryResult, ResultTable
from .registry import DatasetRegistry

__all__ = [
    "Operation",
    "DPQLError",
    "InputError",
    "DatasetNotFoundError",
    "EngineError",
    "RaggedDatasetError",
    "Dataset",
    "ParsedQuery",
    "QueryResult",
    "ResultTable",
    "DatasetRegistry",
]
