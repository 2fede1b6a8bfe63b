"""
Key-value store implementations.

The journal persists through a plain string get/set store. Two stores are
provided: an in-memory one for tests and previews, and a JSON file on disk.
"""

import json
from pathlib import Path

from loguru import logger

from tradelog.core.exceptions.journal import StorageError


class InMemoryKeyValueStore:
    """Dictionary-backed store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        """Read a value, or None when the key is absent."""
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Write a value."""
        self._items[key] = value


class JsonFileKeyValueStore:
    """Store keeping every key in a single JSON object on disk.

    Each write rewrites the whole file through a temporary sibling so a
    crash mid-write never leaves a truncated store behind.
    """

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = Path(file_path)

    def get_item(self, key: str) -> str | None:
        """Read a value, or None when the key or the file is absent."""
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Write a value."""
        items = self._read()
        items[key] = value
        self._write(items)

    def _read(self) -> dict[str, str]:
        if not self.file_path.exists():
            return {}
        try:
            with self.file_path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read store {self.file_path.name}: {e}")
            raise StorageError(f"Failed to read store: {self.file_path.name}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Store {self.file_path.name} does not hold a JSON object")
        return data

    def _write(self, items: dict[str, str]) -> None:
        temp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(items, handle)
            temp_path.replace(self.file_path)
        except OSError as e:
            logger.error(f"Failed to write store {self.file_path.name}: {e}")
            raise StorageError(f"Failed to write store: {self.file_path.name}") from e
