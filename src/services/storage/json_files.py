"""
JSON File Storage Implementation

DESIGN DECISION: One file per key inside a data directory:

    <data_dir>/habit-tracker-habits.json
    <data_dir>/habit-tracker-categories.json

Users can open and read these files directly, and each collection is
written independently, matching the two-entry layout.

Writes go to a temp file first and are moved into place with os.replace,
so a crash mid-write leaves the previous file intact.
"""

import os
from pathlib import Path
from typing import Optional

from src.services.storage.interface import (
    CorruptDataError,
    KeyValueStorageInterface,
    StorageError,
)


class JsonFileStorage(KeyValueStorageInterface):
    """Stores each key as ``<key>.json`` under a directory."""

    def __init__(self, data_dir: Path):
        self._data_dir = Path(data_dir)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data directory {self._data_dir}: {e}")

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise CorruptDataError(f"{path} is not valid UTF-8: {e}")
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}")

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp = path.with_name(path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}")

    def remove_item(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}")
