"""Services package."""

from src.services.storage import (
    CorruptDataError,
    HabitPersistence,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    SqliteStorage,
    StorageError,
)

__all__ = [
    "CorruptDataError",
    "HabitPersistence",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "SqliteStorage",
    "StorageError",
]
