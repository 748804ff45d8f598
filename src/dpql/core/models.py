"""Core data models.

This module defines the data structures shared by the engine and its callers:
- Dataset: a named, immutable in-memory table of string-or-null cells
- ParsedQuery: the operation selected for a free-text query
- ResultTable: one table of discovered relationships
- QueryResult: result tables plus non-fatal warnings
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dpql.core.enums import Operation

Cell = Optional[str]
Row = Tuple[Cell, ...]


@dataclass(frozen=True)
class Dataset:
    """A named table held in memory.

    Attributes:
        name: Unique dataset name (registry key).
        columns: Ordered column names, unique within the dataset.
        rows: Ordered rows; each row should have one cell per column.
        source: Where the data came from (file name or caller-provided label).

    The row-length invariant is not enforced here so that a malformed dataset
    can still be registered and then refused by the discovery engine with a
    clear message.

    Examples:
        >>> ds = Dataset.from_rows("T", ["A", "B"], [["1", "x"], ["2", None]])
        >>> ds.row_count
        2
        >>> ds.column_index("B")
        1
    """

    name: str
    columns: Tuple[str, ...]
    rows: Tuple[Row, ...]
    source: Optional[str] = None

    @classmethod
    def from_rows(
        cls,
        name: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        source: Optional[str] = None,
    ) -> "Dataset":
        """Build a dataset from plain lists, converting cells to ``str``."""
        converted = tuple(
            tuple(None if cell is None else str(cell) for cell in row) for row in rows
        )
        return cls(name=name, columns=tuple(columns), rows=converted, source=source)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column_index(self, column: str) -> int:
        """Position of ``column``; raises ValueError if absent."""
        return self.columns.index(column)

    def is_rectangular(self) -> bool:
        width = len(self.columns)
        return all(len(row) == width for row in self.rows)

    def metadata(self) -> Dict[str, Any]:
        """Summary used by dataset listings."""
        return {
            "name": self.name,
            "columns": list(self.columns),
            "rowCount": self.row_count,
            "source": self.source,
        }


@dataclass(frozen=True)
class ParsedQuery:
    """Outcome of classifying a free-text query."""

    operation: Operation
    select_columns: List[str] = field(default_factory=list)

    @classmethod
    def for_operation(cls, operation: Operation) -> "ParsedQuery":
        return cls(operation=operation, select_columns=operation.select_columns)

    def to_dict(self) -> Dict[str, Any]:
        return {"selectColumns": list(self.select_columns), "operation": self.operation.value}


@dataclass
class ResultTable:
    """A table of discovered relationships.

    Attributes:
        name: Table name (e.g. "UniqueKeys").
        columns: Ordered column headers.
        rows: Ordered rows of string tuples, one per discovered relationship.
    """

    name: str
    columns: List[str]
    rows: List[Tuple[str, ...]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": list(self.columns),
            "rows": [list(r) for r in self.rows],
        }


@dataclass
class QueryResult:
    """Tables and warnings produced by one query.

    Examples:
        >>> result = QueryResult(tables=[], warnings=["No datasets loaded."])
        >>> result.is_empty()
        True
    """

    tables: List[ResultTable] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        """True when no table holds any row."""
        return all(not t.rows for t in self.tables)

    def row_count(self) -> int:
        return sum(len(t.rows) for t in self.tables)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tables": [t.to_dict() for t in self.tables],
            "warnings": list(self.warnings),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def summary(self) -> str:
        """Generate a concise text summary.

        Returns:
            Multi-line summary string with table, row and warning counts.
        """
        names = ", ".join(t.name for t in self.tables) or "none"
        return (
            f"Query Summary:\n"
            f"  Tables: {len(self.tables)} ({names})\n"
            f"  Rows: {self.row_count()}\n"
            f"  Warnings: {len(self.warnings)}"
        )

    def to_markdown(self) -> str:
        """Render every table as a Markdown table, followed by warnings."""
        lines: List[str] = []
        for table in self.tables:
            lines.append(f"## {table.name}")
            lines.append("")
            if table.rows:
                lines.append("| " + " | ".join(table.columns) + " |")
                lines.append("|" + "|".join(" --- " for _ in table.columns) + "|")
                for row in table.rows:
                    lines.append("| " + " | ".join(_escape_md(v) for v in row) + " |")
            else:
                lines.append("_No rows._")
            lines.append("")

        if self.warnings:
            lines.append("## ⚠️ Warnings")
            lines.append("")
            for msg in self.warnings:
                lines.append(f"- {msg}")
            lines.append("")

        return "\n".join(lines)

    def to_console(self) -> str:
        """Plain-text rendering for terminal output."""
        lines = [self.summary(), ""]
        for table in self.tables:
            lines.append(f"{table.name} ({len(table.rows)} rows)")
            lines.append("  " + " | ".join(table.columns))
            for row in table.rows:
                lines.append("  " + " | ".join(row))
            lines.append("")
        for msg in self.warnings:
            lines.append(f"⚠️ {msg}")
        return "\n".join(lines).rstrip("\n")


def _escape_md(value: str) -> str:
    return str(value).replace("|", "\\|")


__all__ = ["Cell", "Row", "Dataset", "ParsedQuery", "ResultTable", "QueryResult"]
