"""Dataset ingestion from CSV text and files."""

from .csv_loader import (
    FALLBACK_DATASET_NAME,
    dataset_name_from_filename,
    load_csv_file,
    parse_csv,
)

__all__ = [
    "parse_csv",
    "load_csv_file",
    "dataset_name_from_filename",
    "FALLBACK_DATASET_NAME",
]
