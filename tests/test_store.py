from pathlib import Path

import pytest

from dailyintake import configuration
from dailyintake.repository.store import KeyValueStore, StorageError


def test_missing_file_reads_as_empty(store: KeyValueStore):
    assert store.get_item("proteinGoal") is None
    assert store.keys() == []


def test_writes_are_buffered_until_flush(store: KeyValueStore):
    store.set_item("proteinGoal", "50")
    assert store.is_dirty
    assert not configuration.DATA_STORE_PATH.exists()

    assert store.flush() is True
    assert not store.is_dirty
    assert configuration.DATA_STORE_PATH.is_file()
    assert store.flush() is False


def test_flushed_values_survive_a_new_session(store: KeyValueStore):
    store.set_item("waterIntake", "750")
    store.set_item("lastResetDate_water", "01/03/2024")
    store.flush()

    reloaded = KeyValueStore()
    assert reloaded.get_item("waterIntake") == "750"
    assert reloaded.get_item("lastResetDate_water") == "01/03/2024"


def test_remove_item(store: KeyValueStore):
    store.set_item("proteinGoal", "50")
    store.flush()

    store.remove_item("proteinGoal")
    store.remove_item("never-set")
    store.flush()

    assert KeyValueStore().get_item("proteinGoal") is None


def test_non_string_values_are_read_as_strings(store: KeyValueStore):
    configuration.DATA_STORE_PATH.write_text("proteinGoal: 50\n")
    assert store.get_item("proteinGoal") == "50"


def test_unreadable_store_raises(store: KeyValueStore):
    configuration.DATA_STORE_PATH.write_text("- just\n- a list\n")
    with pytest.raises(StorageError):
        store.get_item("proteinGoal")


def test_unwritable_store_raises(store: KeyValueStore, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    monkeypatch.setattr(configuration, "DATA_STORE_PATH", blocker / "store.yaml")

    store.set_item("proteinGoal", "50")
    with pytest.raises(StorageError):
        store.flush()


def test_flush_keeps_keys_written_by_another_session(store: KeyValueStore):
    store.set_item("proteinGoal", "50")
    store.set_item("waterGoal", "2000")
    store.flush()

    other = KeyValueStore()
    other.set_item("proteinIntake", "40")
    other.remove_item("waterGoal")
    other.flush()

    store.set_item("proteinGoal", "60")
    store.flush()

    reloaded = KeyValueStore()
    assert reloaded.get_item("proteinGoal") == "60"
    assert reloaded.get_item("proteinIntake") == "40"
    assert reloaded.get_item("waterGoal") is None


def test_refresh_rereads_the_file_and_keeps_pending_changes(store: KeyValueStore):
    store.set_item("proteinGoal", "50")
    store.flush()
    store.set_item("waterGoal", "2000")

    other = KeyValueStore()
    other.set_item("proteinGoal", "80")
    other.set_item("waterGoal", "1500")
    other.flush()

    store.refresh()

    assert store.get_item("proteinGoal") == "80"
    assert store.get_item("waterGoal") == "2000"
    assert store.is_dirty
