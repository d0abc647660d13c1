import pendulum

from dailyintake.model.quantity import QuantityKind
from dailyintake.repository.store import KeyValueStore
from dailyintake.repository.tracker_state import (
    TrackerStateRepository,
    deserialize_history,
    serialize_history,
)


def test_missing_keys_load_defaults(repository: TrackerStateRepository):
    state = repository.load(QuantityKind.WATER)

    assert state["kind"] == QuantityKind.WATER
    assert state["unit"] == "ml"
    assert state["goal"] == 0
    assert state["running_total"] == 0
    assert state["history"] == {}
    assert state["last_reset_date"] is None
    assert state["reminder_minutes"] is None


def test_loads_values_written_by_the_browser_version(store: KeyValueStore):
    store.set_item("proteinGoal", "120")
    store.set_item("proteinIntake", "45")
    store.set_item(
        "dailyHistory_protein",
        '{"29/02/2024":[10,20],"01/03/2024":[20,25]}',
    )
    store.set_item("lastResetDate_protein", "01/03/2024")
    store.set_item("reminderTime_protein", "30")

    state = TrackerStateRepository(store).load(QuantityKind.PROTEIN)

    assert state["goal"] == 120
    assert state["running_total"] == 45
    assert state["history"] == {
        pendulum.date(2024, 2, 29): [10, 20],
        pendulum.date(2024, 3, 1): [20, 25],
    }
    assert state["last_reset_date"] == pendulum.date(2024, 3, 1)
    assert state["reminder_minutes"] == 30


def test_namespaces_do_not_overlap(store: KeyValueStore):
    store.set_item("proteinGoal", "120")
    store.set_item("waterGoal", "2000")

    repository = TrackerStateRepository(store)
    assert repository.load(QuantityKind.PROTEIN)["goal"] == 120
    assert repository.load(QuantityKind.WATER)["goal"] == 2000


def test_malformed_values_fall_back_to_defaults(store: KeyValueStore):
    store.set_item("proteinGoal", "lots")
    store.set_item("proteinIntake", "-4")
    store.set_item("reminderTime_protein", "0")
    store.set_item("lastResetDate_protein", "yesterday")

    state = TrackerStateRepository(store).load(QuantityKind.PROTEIN)

    assert state["goal"] == 0
    assert state["running_total"] == 0
    assert state["reminder_minutes"] is None
    assert state["last_reset_date"] is None


def test_running_total_follows_history_of_tracked_day(store: KeyValueStore):
    store.set_item("waterIntake", "999")
    store.set_item("dailyHistory_water", "{01/03/2024: [250, 500]}")
    store.set_item("lastResetDate_water", "01/03/2024")

    state = TrackerStateRepository(store).load(QuantityKind.WATER)

    assert state["running_total"] == 750


def test_history_skips_invalid_dates_and_amounts():
    history = deserialize_history(
        '{"01/03/2024": [10, 0, -5, "x", 2.5, true, 20], "someday": [1], "02/03/2024": 7}'
    )
    assert history == {pendulum.date(2024, 3, 1): [10, 20]}


def test_history_merges_padded_and_unpadded_keys():
    history = deserialize_history('{"01/03/2024": [10], "1/3/2024": [5]}')
    assert history == {pendulum.date(2024, 3, 1): [10, 5]}


def test_unreadable_history_is_empty():
    assert deserialize_history("{unclosed: [1, 2") == {}
    assert deserialize_history("") == {}
    assert deserialize_history("[1, 2]") == {}


def test_serialized_history_round_trips_with_empty_days():
    history = {
        pendulum.date(2024, 12, 31): [500],
        pendulum.date(2025, 1, 1): [],
        pendulum.date(2024, 6, 15): [250, 250],
    }
    raw = serialize_history(history)

    assert "31/12/2024" in raw
    assert "\n" not in raw
    assert deserialize_history(raw) == history


def test_save_and_remove_all(store: KeyValueStore):
    repository = TrackerStateRepository(store)
    state = repository.load(QuantityKind.PROTEIN)
    state["goal"] = 80
    state["running_total"] = 30
    state["history"] = {pendulum.date(2024, 3, 1): [30]}
    state["last_reset_date"] = pendulum.date(2024, 3, 1)
    state["reminder_minutes"] = 15

    repository.save_goal(state)
    repository.save_running_total(state)
    repository.save_history(state)
    repository.save_last_reset_date(state)
    repository.save_reminder(state)

    assert store.get_item("proteinGoal") == "80"
    assert store.get_item("proteinIntake") == "30"
    assert store.get_item("lastResetDate_protein") == "01/03/2024"
    assert store.get_item("reminderTime_protein") == "15"
    assert repository.load(QuantityKind.PROTEIN) == state

    store.set_item("waterGoal", "2000")
    repository.remove_all(QuantityKind.PROTEIN)

    assert store.keys() == ["waterGoal"]
