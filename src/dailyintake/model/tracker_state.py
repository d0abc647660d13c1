# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from dailyintake.model.quantity import QuantityKind


class TrackerState(TypedDict):
    kind: QuantityKind
    unit: str  # e.g., "g", "ml"
    goal: int  # 0 means no goal set
    running_total: int  # sum of history[last_reset_date]

    # Logged amounts per calendar date, in logging order
    history: dict[pendulum.Date, list[int]]

    last_reset_date: Optional[pendulum.Date]
    reminder_minutes: Optional[int]


class DisplayState(TypedDict):
    total: int
    remaining: int
    progress_percent: float  # 0..100


class HistoryDay(TypedDict):
    date: pendulum.Date
    total: int


class TodayDetail(TypedDict):
    total: int
    entries: list[int]
