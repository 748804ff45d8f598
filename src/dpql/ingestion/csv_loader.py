"""CSV ingestion.

Turns raw CSV text into a ``Dataset``. The first record supplies the column
names; every following record supplies string cells. No numeric or date
inference is done: ``pandas.read_csv`` is asked for ``str`` columns with NA
detection disabled, so ``"NULL"`` or ``"NaN"`` stay literal strings. Cells
missing from a short record become ``None``.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from dpql.core.errors import InputError
from dpql.core.models import Dataset

logger = logging.getLogger(__name__)

FALLBACK_DATASET_NAME = "dataset"


def dataset_name_from_filename(filename: Optional[str]) -> str:
    """Derive a dataset name by dropping the file extension.

    Examples:
        >>> dataset_name_from_filename("orders.csv")
        'orders'
        >>> dataset_name_from_filename(None)
        'dataset'
    """
    if not filename:
        return FALLBACK_DATASET_NAME
    stem = Path(filename).name
    if "." in stem[1:]:
        stem = stem.rsplit(".", 1)[0]
    return stem.strip() or FALLBACK_DATASET_NAME


def parse_csv(
    raw_text: str,
    name: str,
    *,
    delimiter: str = ",",
    source: Optional[str] = None,
) -> Dataset:
    """Parse CSV text into a Dataset.

    Args:
        raw_text: Full CSV content including the header line.
        name: Dataset name to assign.
        delimiter: Field separator.
        source: Optional provenance label (file name, upload name).

    Returns:
        Dataset with string-or-null cells.

    Raises:
        InputError: If the text is empty, malformed, or has duplicate headers.
    """
    if raw_text is None or not raw_text.strip():
        raise InputError("No CSV content provided")

    text = raw_text.lstrip("\ufeff")
    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise InputError("No CSV content provided") from e
    except pd.errors.ParserError as e:
        raise InputError(f"Failed to parse CSV for dataset '{name}': {e}") from e

    header = [str(v).strip() for v in df.iloc[0].tolist()]
    _check_header(header, name)

    records = list(df.iloc[1:].itertuples(index=False, name=None))
    widths = _record_widths(text, delimiter, name)[1:]
    if len(widths) != len(records):
        logger.warning(
            "Could not count fields per record for dataset %s; short records keep empty cells",
            name,
        )
        widths = [len(header)] * len(records)
    rows = [
        tuple(None if i >= width or pd.isna(v) else str(v) for i, v in enumerate(record))
        for record, width in zip(records, widths)
    ]
    logger.debug("Parsed dataset %s: %d columns, %d rows", name, len(header), len(rows))
    return Dataset(name=name, columns=tuple(header), rows=tuple(rows), source=source)


def _record_widths(text: str, delimiter: str, name: str) -> List[int]:
    """Field count of each non-blank record, header included.

    pandas pads short records with empty strings once NA detection is off, so
    the real widths are read separately to tell a missing cell from an empty one.
    """
    if len(delimiter) != 1:
        return []
    try:
        records = list(csv.reader(io.StringIO(text), delimiter=delimiter))
    except csv.Error as e:
        raise InputError(f"Failed to parse CSV for dataset '{name}': {e}") from e
    return [len(r) for r in records if r and not (len(r) == 1 and not r[0].strip())]


def _check_header(header: List[str], name: str) -> None:
    if any(not h for h in header):
        raise InputError(f"CSV header for dataset '{name}' contains an empty column name")
    seen = set()
    duplicates = []
    for h in header:
        if h in seen and h not in duplicates:
            duplicates.append(h)
        seen.add(h)
    if duplicates:
        raise InputError(
            f"CSV header for dataset '{name}' has duplicate columns: {', '.join(duplicates)}"
        )


def load_csv_file(
    path: Union[str, Path],
    *,
    name: Optional[str] = None,
    delimiter: str = ",",
    encoding: str = "utf-8-sig",
) -> Dataset:
    """Read a CSV file from disk into a Dataset.

    The dataset name defaults to the file name without extension and the
    source is the file name.

    Raises:
        InputError: If the file is missing, unreadable, or not valid CSV.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise InputError(f"CSV file not found: {csv_path}")
    try:
        text = csv_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Failed to read CSV file {csv_path}: {e}") from e

    dataset_name = name.strip() if name and name.strip() else dataset_name_from_filename(csv_path.name)
    return parse_csv(text, dataset_name, delimiter=delimiter, source=csv_path.name)


__all__ = ["parse_csv", "load_csv_file", "dataset_name_from_filename", "FALLBACK_DATASET_NAME"]
