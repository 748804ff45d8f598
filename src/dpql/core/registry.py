from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from dpql.core.errors import DatasetNotFoundError, InputError
from dpql.core.models import Dataset

logger = logging.getLogger(__name__)


class DatasetRegistry:
    """In-memory store of named datasets.

    Mutations and snapshots are serialized by a lock held only while the
    underlying dict is touched. Discovery always runs on ``snapshot()``, so an
    in-flight query never observes a concurrent add or remove.
    """

    def __init__(self) -> None:
        self._datasets: Dict[str, Dataset] = {}
        self._lock = threading.Lock()

    def add(self, name: str, dataset: Dataset) -> None:
        """Register ``dataset`` under ``name``, replacing any previous entry."""
        if not name or not name.strip():
            raise InputError("Dataset name is required")
        with self._lock:
            replaced = name in self._datasets
            self._datasets[name] = dataset
        if replaced:
            logger.info("Replaced dataset %s (%d rows)", name, dataset.row_count)
        else:
            logger.info("Registered dataset %s (%d rows)", name, dataset.row_count)

    def remove(self, name: str) -> Dataset:
        """Remove and return the dataset registered as ``name``."""
        with self._lock:
            try:
                dataset = self._datasets.pop(name)
            except KeyError:
                raise DatasetNotFoundError(name) from None
        logger.info("Removed dataset %s", name)
        return dataset

    def remove_all(self) -> List[str]:
        """Remove every dataset; return the removed names in registry order."""
        with self._lock:
            names = list(self._datasets)
            self._datasets.clear()
        logger.info("Removed %d datasets", len(names))
        return names

    def get(self, name: str) -> Optional[Dataset]:
        with self._lock:
            return self._datasets.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._datasets)

    def list_metadata(self) -> List[Dict]:
        """Return ``{name, columns, rowCount, source}`` for each dataset."""
        with self._lock:
            datasets = list(self._datasets.values())
        return [d.metadata() for d in datasets]

    def snapshot(self) -> Mapping[str, Dataset]:
        """Return a read-only copy of the name -> dataset map."""
        with self._lock:
            copy = dict(self._datasets)
        return MappingProxyType(copy)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._datasets

    def __len__(self) -> int:
        with self._lock:
            return len(self._datasets)
