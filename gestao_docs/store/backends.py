"""Storage backends holding named collections of JSON-compatible records."""

import copy
import json
from pathlib import Path
from typing import Any, Protocol

from gestao_docs.exceptions import StoreError
from gestao_docs.logging import get_logger

logger = get_logger(__name__)


class StorageBackend(Protocol):
    """Load/save/clear over named collections."""

    def load(self, collection: str) -> list[dict[str, Any]]:
        ...

    def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        ...

    def clear(self, collection: str) -> None:
        ...


class MemoryBackend:
    """In-process backend, mainly for tests and one-shot analyses."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial or {})

    def load(self, collection: str) -> list[dict[str, Any]]:
        """Return a copy of the collection (empty when never saved)."""
        return copy.deepcopy(self._collections.get(collection, []))

    def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        """Replace the collection."""
        self._collections[collection] = copy.deepcopy(records)

    def clear(self, collection: str) -> None:
        """Reset the collection to empty."""
        self._collections[collection] = []


class JsonFileBackend:
    """Store each collection as ``<data_dir>/<collection>.json``."""

    def __init__(self, data_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file backend.

        Parameters
        ----------
        data_dir : str | Path
            Directory holding one JSON file per collection.
        pretty : bool
            Pretty-print JSON output.
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty

    def path_for(self, collection: str) -> Path:
        """Return the file backing a collection."""
        return self.data_dir / f"{collection}.json"

    def load(self, collection: str) -> list[dict[str, Any]]:
        """Read a collection; a missing file is an empty collection."""
        file_path = self.path_for(collection)
        if not file_path.exists():
            return []

        try:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read collection {collection!r} from {file_path}: {e}") from e

        if not isinstance(data, list):
            raise StoreError(f"Collection {collection!r} in {file_path} is not a list")
        return data

    def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        """Write a collection, replacing the file."""
        file_path = self.path_for(collection)
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(records, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(records, f, ensure_ascii=False, default=str)
        except OSError as e:
            raise StoreError(f"Could not write collection {collection!r} to {file_path}: {e}") from e

        logger.debug("Saved %d records to %s", len(records), file_path)

    def clear(self, collection: str) -> None:
        """Reset the collection to an empty list."""
        self.save(collection, [])
