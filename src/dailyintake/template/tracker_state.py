# SPDX-License-Identifier: MIT

from dailyintake.model.quantity import QuantityKind
from dailyintake.model.tracker_state import TrackerState


def get_tracker_state_template(kind: QuantityKind) -> TrackerState:
    return {
        "kind": kind,
        "unit": kind.unit,
        "goal": 0,
        "running_total": 0,
        "history": {},
        "last_reset_date": None,
        "reminder_minutes": None,
    }
