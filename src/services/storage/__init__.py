"""
Storage Services Package

Provides the abstract key-value interface, its concrete backends, and the
typed adapter that reads and writes the habit and category collections.
"""

from src.services.storage.interface import (
    CorruptDataError,
    KeyValueStorageInterface,
    StorageError,
)
from src.services.storage.json_files import JsonFileStorage
from src.services.storage.memory import InMemoryStorage
from src.services.storage.persistence import HabitPersistence
from src.services.storage.sqlite import SqliteStorage

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "CorruptDataError",
    "StorageError",
    # Backends
    "InMemoryStorage",
    "JsonFileStorage",
    "SqliteStorage",
    # Adapter
    "HabitPersistence",
]
