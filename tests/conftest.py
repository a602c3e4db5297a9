"""Pytest configuration and fixtures for contextlingo tests."""

import logging
from pathlib import Path

import pytest

from contextlingo.core.config import default_document
from contextlingo.core.config.constants import STORE_PATH_ENV
from contextlingo.core.storage import KeyValueStore, SettingsStore
from contextlingo.core.types import ConfigDocument


@pytest.fixture(autouse=True)
def isolated_store_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default store at a per-test file.

    Tests never touch ~/.contextlingo, even when they open the store
    without an explicit path.
    """
    path = tmp_path / "home-store" / "storage.yaml"
    monkeypatch.setenv(STORE_PATH_ENV, str(path))
    return path


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Restore root logger handlers after tests that run CLI commands."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """Path of a fresh (not yet created) store file."""
    return tmp_path / "storage.yaml"


@pytest.fixture
def settings_store(store_path: Path) -> SettingsStore:
    """SettingsStore on an empty file-backed store."""
    return SettingsStore(KeyValueStore(store_path))


@pytest.fixture
def defaults() -> ConfigDocument:
    """Fresh copy of the complete default document."""
    return default_document()
