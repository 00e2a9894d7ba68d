"""Shared fixtures: in-memory storage, fixed clock, predictable ids."""

import itertools
from datetime import date, datetime, timezone

import pytest

from src.audit import AuditLogger
from src.services.storage import HabitPersistence, InMemoryStorage
from src.store import HabitStore


FIXED_NOW = datetime(2024, 1, 2, 8, 30, tzinfo=timezone.utc)
TUESDAY = date(2024, 1, 2)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def persistence(storage):
    return HabitPersistence(storage)


@pytest.fixture
def make_store(persistence):
    """Build stores over the same storage; ids stay unique across them."""
    counter = itertools.count(1)

    def _make(today: date = TUESDAY, **kwargs) -> HabitStore:
        return HabitStore(
            persistence,
            audit_logger=AuditLogger(),
            clock=lambda: FIXED_NOW,
            today=lambda: today,
            id_factory=lambda: f"id-{next(counter)}",
            **kwargs,
        )

    return _make


@pytest.fixture
def store(make_store):
    return make_store()
