"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pendulum
import pytest
from yaml import dump

from dailyintake import configuration
from dailyintake.repository.configuration import CONFIGURATION_REPO
from dailyintake.repository.store import STORE, KeyValueStore
from dailyintake.repository.tracker_state import TrackerStateRepository
from dailyintake.view import state as view_state


class FakeClock:
    """Callable clock the tests move by hand."""

    def __init__(self, now: pendulum.DateTime) -> None:
        self.now = now

    def __call__(self) -> pendulum.DateTime:
        return self.now

    def advance(self, **kwargs: int) -> None:
        self.now = self.now.add(**kwargs)


@pytest.fixture(autouse=True)
def _isolate_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config and data files at a temporary directory."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_dir)
    monkeypatch.setattr(configuration, "DATA_STORE_PATH", data_dir / "store.yaml")

    configuration.APP_CONFIG_PATH.write_text(
        dump(configuration.get_default_configuration())
    )

    STORE.reset()
    CONFIGURATION_REPO.reset()
    view_state.set_show_header(True)
    yield
    STORE.reset()
    CONFIGURATION_REPO.reset()


@pytest.fixture
def store() -> KeyValueStore:
    return KeyValueStore()


@pytest.fixture
def repository(store: KeyValueStore) -> TrackerStateRepository:
    return TrackerStateRepository(store)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(pendulum.datetime(2024, 3, 1, 12, 0, tz="local"))
