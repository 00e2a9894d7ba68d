"""Tests for settings loading."""

import pytest
from pathlib import Path

from src.config import AppSettings, StorageSettings, get_settings, validate_all_settings


class TestStorageSettings:

    def test_defaults(self, monkeypatch):
        for name in ["BACKEND", "DATA_DIR", "HABITS_KEY", "CATEGORIES_KEY", "PERSIST_EMPTY_COLLECTIONS"]:
            monkeypatch.delenv(f"HABIT_STORAGE_{name}", raising=False)
        settings = StorageSettings()
        assert settings.backend == "json"
        assert settings.habits_key == "habit-tracker-habits"
        assert settings.categories_key == "habit-tracker-categories"
        assert settings.persist_empty_collections is False

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HABIT_STORAGE_BACKEND", "sqlite")
        monkeypatch.setenv("HABIT_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("HABIT_STORAGE_PERSIST_EMPTY_COLLECTIONS", "true")
        settings = StorageSettings()
        assert settings.backend == "sqlite"
        assert settings.sqlite_path == Path(tmp_path) / "habits.db"
        assert settings.persist_empty_collections is True

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError):
            StorageSettings(backend="postgres")

    def test_key_must_be_a_plain_name(self):
        with pytest.raises(ValueError, match="Invalid storage key"):
            StorageSettings(habits_key="../escape")


class TestAppSettings:

    def test_debug_mode_forces_debug_level(self):
        assert AppSettings(log_level="warning", debug_mode=True).effective_log_level == "DEBUG"
        assert AppSettings(log_level="warning").effective_log_level == "WARNING"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValueError):
            AppSettings(log_level="LOUD")


class TestValidateAllSettings:

    def test_reports_invalid_storage(self, monkeypatch):
        monkeypatch.setenv("HABIT_STORAGE_BACKEND", "postgres")
        get_settings.cache_clear()
        try:
            results = validate_all_settings()
        finally:
            get_settings.cache_clear()
        assert results["storage"] is False
        assert "storage_error" in results
        assert results["app"] is True
