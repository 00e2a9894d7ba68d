"""
Abstract Storage Interface

DESIGN DECISION: The store persists through a plain key-value interface,
the same shape as browser localStorage. This allows us to:
1. Keep JSON files on disk as the default backend
2. Swap in SQLite without touching the store
3. Use in-memory storage for tests

Backends only move strings. Encoding and decoding the habit and category
collections is the job of HabitPersistence.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for string key-value storage.

    Any backend (JSON files, SQLite, memory) must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        pass

    def close(self) -> None:
        """Release any held resources. Safe to call more than once."""


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """Stored value exists but is not a valid collection."""
    pass
