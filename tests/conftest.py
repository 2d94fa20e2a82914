"""Shared fixtures for growsteps tests."""

from pathlib import Path

import pytest

from growsteps import configuration
from growsteps.repository.configuration import CONFIGURATION_REPO
from growsteps.repository.entry import ENTRY_REPO, EntryRepository
from growsteps.repository.storage import InMemoryKeyValueStorage
from growsteps.template.entry import get_entry_template


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def repository(storage: InMemoryKeyValueStorage) -> EntryRepository:
    return EntryRepository(storage, key="grow_entries")


@pytest.fixture
def make_entry():
    """Build a filled-in entry; keyword arguments override fields."""

    def _make_entry(**fields):
        entry = get_entry_template()
        entry["category"] = "健康"
        entry["title"] = "30分歩く"
        entry["micro_steps"] = ["靴を履く", "外に出る"]
        entry["smart_plan"] = "19:00に近所を一周する"
        entry.update(fields)
        return entry

    return _make_entry


@pytest.fixture
def app_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config and data at a temporary directory for CLI tests."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    config_dir.mkdir()
    data_dir.mkdir()
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_dir)
    CONFIGURATION_REPO.reset()
    ENTRY_REPO.load()
    yield tmp_path
    CONFIGURATION_REPO.reset()
