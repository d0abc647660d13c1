# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

import pendulum
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from dailyintake import time
from dailyintake.model.quantity import QuantityKind
from dailyintake.model.tracker_state import TrackerState
from dailyintake.repository.store import STORE, KeyValueStore
from dailyintake.template.tracker_state import get_tracker_state_template

logger = logging.getLogger(__name__)


def goal_key(kind: QuantityKind) -> str:
    return f"{kind}Goal"


def intake_key(kind: QuantityKind) -> str:
    return f"{kind}Intake"


def history_key(kind: QuantityKind) -> str:
    return f"dailyHistory_{kind}"


def reminder_key(kind: QuantityKind) -> str:
    return f"reminderTime_{kind}"


def last_reset_key(kind: QuantityKind) -> str:
    return f"lastResetDate_{kind}"


def all_keys(kind: QuantityKind) -> list[str]:
    return [
        intake_key(kind),
        goal_key(kind),
        reminder_key(kind),
        last_reset_key(kind),
        history_key(kind),
    ]


def serialize_history(history: dict[pendulum.Date, list[int]]) -> str:
    serializable_history = {
        time.date_to_storage_str(date): list(amounts)
        for date, amounts in sorted(history.items())
    }
    return dump(
        serializable_history,
        Dumper=Dumper,
        default_flow_style=True,
        sort_keys=False,
        width=65536,
    ).strip()


def deserialize_history(raw_history: str) -> dict[pendulum.Date, list[int]]:
    """
    Parse a stored history mapping.

    Accepts the flow-style YAML written by `serialize_history` as well as
    plain JSON objects. Unparseable dates and non-positive or non-integer
    amounts are dropped with a warning.
    """
    try:
        raw: Any = load(raw_history, Loader=Loader)
    except YAMLError as e:
        logger.warning("Discarding unreadable history: %s", e)
        return {}

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("Discarding history that is not a mapping: %r", raw)
        return {}

    history: dict[pendulum.Date, list[int]] = {}
    for raw_date, raw_amounts in raw.items():
        try:
            date = time.date_from_storage_str(str(raw_date))
        except ValueError:
            logger.warning("Skipping history entry with invalid date %r", raw_date)
            continue

        if not isinstance(raw_amounts, list):
            logger.warning("Skipping history entry %r: amounts are not a list", raw_date)
            continue

        amounts = history.setdefault(date, [])
        for amount in raw_amounts:
            if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
                logger.warning(
                    "Dropping invalid amount %r logged on %s", amount, raw_date
                )
                continue
            amounts.append(amount)

    return history


def parse_stored_int(raw_value: Optional[str], default: int, key: str) -> int:
    if raw_value is None:
        return default
    try:
        value = int(raw_value.strip())
    except ValueError:
        logger.warning("Ignoring non-integer value %r for %s", raw_value, key)
        return default
    if value < 0:
        logger.warning("Ignoring negative value %r for %s", raw_value, key)
        return default
    return value


class TrackerStateRepository:
    """Maps a tracker's state onto its keys in the shared key-value store."""

    def __init__(self, store: KeyValueStore = STORE) -> None:
        self.store = store

    def load(self, kind: QuantityKind) -> TrackerState:
        state = get_tracker_state_template(kind)

        state["goal"] = parse_stored_int(
            self.store.get_item(goal_key(kind)), 0, goal_key(kind)
        )

        raw_history = self.store.get_item(history_key(kind))
        if raw_history is not None:
            state["history"] = deserialize_history(raw_history)

        raw_last_reset = self.store.get_item(last_reset_key(kind))
        if raw_last_reset is not None:
            try:
                state["last_reset_date"] = time.date_from_storage_str(raw_last_reset)
            except ValueError:
                # Treated as absent, so the next day-boundary check resets
                logger.warning(
                    "Ignoring invalid date %r for %s",
                    raw_last_reset,
                    last_reset_key(kind),
                )

        reminder_minutes = parse_stored_int(
            self.store.get_item(reminder_key(kind)), 0, reminder_key(kind)
        )
        state["reminder_minutes"] = reminder_minutes if reminder_minutes > 0 else None

        stored_total = parse_stored_int(
            self.store.get_item(intake_key(kind)), 0, intake_key(kind)
        )
        state["running_total"] = self.__reconcile_running_total(state, stored_total)

        return state

    def __reconcile_running_total(self, state: TrackerState, stored_total: int) -> int:
        # The running total always mirrors the tracked day's history
        tracked_day = state["last_reset_date"]
        if tracked_day is None:
            return stored_total
        history_total = sum(state["history"].get(tracked_day, []))
        if history_total != stored_total:
            logger.warning(
                "Stored %s total %d disagrees with history total %d; using history",
                state["kind"],
                stored_total,
                history_total,
            )
        return history_total

    def save_goal(self, state: TrackerState) -> None:
        self.store.set_item(goal_key(state["kind"]), str(state["goal"]))

    def save_running_total(self, state: TrackerState) -> None:
        self.store.set_item(intake_key(state["kind"]), str(state["running_total"]))

    def save_history(self, state: TrackerState) -> None:
        self.store.set_item(
            history_key(state["kind"]), serialize_history(state["history"])
        )

    def save_last_reset_date(self, state: TrackerState) -> None:
        last_reset = time.date_to_storage_str_optional(state["last_reset_date"])
        if last_reset is None:
            self.store.remove_item(last_reset_key(state["kind"]))
        else:
            self.store.set_item(last_reset_key(state["kind"]), last_reset)

    def save_reminder(self, state: TrackerState) -> None:
        if state["reminder_minutes"] is None:
            self.store.remove_item(reminder_key(state["kind"]))
        else:
            self.store.set_item(
                reminder_key(state["kind"]), str(state["reminder_minutes"])
            )

    def refresh(self) -> None:
        self.store.refresh()

    def flush(self) -> bool:
        return self.store.flush()

    def remove_all(self, kind: QuantityKind) -> None:
        for key in all_keys(kind):
            self.store.remove_item(key)
