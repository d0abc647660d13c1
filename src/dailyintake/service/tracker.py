# SPDX-License-Identifier: MIT

import asyncio
import logging
from typing import Callable, Iterator, Optional

import pendulum

from dailyintake.model.quantity import QuantityKind
from dailyintake.model.tracker_state import (
    DisplayState,
    HistoryDay,
    TodayDetail,
    TrackerState,
)
from dailyintake.repository.tracker_state import TrackerStateRepository
from dailyintake.service.schedule import RecurringTask
from dailyintake.service.signal import Signal
from dailyintake.template.tracker_state import get_tracker_state_template
from dailyintake.time import calendar_date, local_hour, now_local

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 7
DEFAULT_CHECK_INTERVAL_SECONDS = 60
DEFAULT_REMINDER_START_HOUR = 8
DEFAULT_REMINDER_END_HOUR = 22


class IntakeValidationError(Exception):
    """Raised when a tracker command receives invalid input."""

    pass


class InvalidGoal(IntakeValidationError):
    pass


class InvalidAmount(IntakeValidationError):
    pass


class InvalidReminderInterval(IntakeValidationError):
    pass


def is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class RecentHistory:
    """
    The most recent logged days, newest first, each with its day total.

    Nothing is computed until iteration, and every iteration starts over
    from the tracker's current history.
    """

    def __init__(self, tracker: "Tracker", limit: int) -> None:
        if limit < 0:
            raise ValueError(f"History limit must not be negative. Got: {limit}")
        self.tracker = tracker
        self.limit = limit

    def __iter__(self) -> Iterator[HistoryDay]:
        history = self.tracker.state["history"]
        dates = sorted(history.keys(), reverse=True)[: self.limit]
        for date in dates:
            yield {"date": date, "total": sum(history[date])}

    def __len__(self) -> int:
        return min(len(self.tracker.state["history"]), self.limit)


class Tracker:
    """
    Daily intake tracker for a single quantity kind.

    Holds the goal, the running total for the tracked day and the per-day
    history, writes every change through the state repository and reports
    back to the presentation layer through signals:

    - invalid_input: the validation error, before it is raised
    - reminder_due: the quantity kind, when a reminder fires inside the
      reminder hours
    - confirm_reset_requested: the quantity kind, when reset_all is called
      without confirmation
    - state_changed: the new DisplayState
    - history_changed: the quantity kind
    """

    def __init__(
        self,
        kind: QuantityKind,
        repository: Optional[TrackerStateRepository] = None,
        clock: Callable[[], pendulum.DateTime] = now_local,
        check_interval_seconds: float = DEFAULT_CHECK_INTERVAL_SECONDS,
        reminder_start_hour: int = DEFAULT_REMINDER_START_HOUR,
        reminder_end_hour: int = DEFAULT_REMINDER_END_HOUR,
    ) -> None:
        self.kind = kind
        self.repository = (
            repository if repository is not None else TrackerStateRepository()
        )
        self.clock = clock
        self.reminder_start_hour = reminder_start_hour
        self.reminder_end_hour = reminder_end_hour

        self.invalid_input = Signal("invalid_input")
        self.reminder_due = Signal("reminder_due")
        self.confirm_reset_requested = Signal("confirm_reset_requested")
        self.state_changed = Signal("state_changed")
        self.history_changed = Signal("history_changed")

        self.state: TrackerState = self.repository.load(kind)

        self.day_boundary_task = RecurringTask(
            f"{kind}-day-boundary",
            check_interval_seconds,
            self.poll,
            run_immediately=True,
        )
        self.reminder_task: Optional[RecurringTask] = None
        self._armed_minutes: Optional[int] = None

    @property
    def unit(self) -> str:
        return self.state["unit"]

    @property
    def goal(self) -> int:
        return self.state["goal"]

    @property
    def running_total(self) -> int:
        return self.state["running_total"]

    @property
    def reminder_minutes(self) -> Optional[int]:
        return self.state["reminder_minutes"]

    @property
    def today(self) -> pendulum.Date:
        """The tracked day; before the first rollover this is the clock's date."""
        if self.state["last_reset_date"] is not None:
            return self.state["last_reset_date"]
        return calendar_date(self.clock())

    # ─────────────────────────────────────────────────────────────
    # Commands
    # ─────────────────────────────────────────────────────────────

    def set_goal(self, value: object) -> None:
        goal = self.__validate_positive_int(
            value,
            InvalidGoal,
            f"Please enter a valid goal (a positive number). Got: {value!r}",
        )

        self.state["goal"] = goal
        self.repository.save_goal(self.state)
        logger.info("Set %s goal to %d %s", self.kind, goal, self.unit)

        self.__notify_state_changed()

    def log_intake(self, amount: object) -> None:
        valid_amount = self.__validate_positive_int(
            amount,
            InvalidAmount,
            f"Please enter a positive number for {self.kind} intake. Got: {amount!r}",
        )

        self.state["history"].setdefault(self.today, []).append(valid_amount)
        self.state["running_total"] += valid_amount
        self.repository.save_history(self.state)
        self.repository.save_running_total(self.state)
        logger.debug("Logged %d %s of %s", valid_amount, self.unit, self.kind)

        self.__notify_state_changed()
        self.history_changed.send(self.kind)

    def reset_daily(self) -> None:
        # An empty list marks the day as tracked with nothing logged
        self.state["history"][self.today] = []
        self.state["running_total"] = 0
        self.repository.save_history(self.state)
        self.repository.save_running_total(self.state)
        logger.info("Reset %s intake for %s", self.kind, self.today)

        self.__notify_state_changed()
        self.history_changed.send(self.kind)

    def reset_all(self, confirmed: bool = False) -> bool:
        """
        Erase the goal, the history and every stored key for this quantity.

        Without confirmation nothing changes: confirm_reset_requested is sent
        and False is returned so the caller can ask the user and retry.
        """
        if not confirmed:
            self.confirm_reset_requested.send(self.kind)
            return False

        self.__cancel_reminder_task()
        self.state = get_tracker_state_template(self.kind)
        self.repository.remove_all(self.kind)
        logger.info("Reset all %s data", self.kind)

        self.__notify_state_changed()
        self.history_changed.send(self.kind)
        return True

    def check_day_boundary(self, now: Optional[pendulum.DateTime] = None) -> bool:
        """
        Roll the running total over when the calendar date has changed.

        This is a polling check: a rollover happens on the first check after
        midnight, not at midnight itself. Returns True if a reset happened.
        """
        today = calendar_date(now if now is not None else self.clock())
        previous_day = self.state["last_reset_date"]
        if today == previous_day:
            return False

        self.state["last_reset_date"] = today
        self.reset_daily()
        self.repository.save_last_reset_date(self.state)
        logger.info("Rolled %s over from %s to %s", self.kind, previous_day, today)
        return True

    def set_reminder(self, interval_minutes: object) -> None:
        minutes = self.__validate_positive_int(
            interval_minutes,
            InvalidReminderInterval,
            f"Please enter a valid reminder interval in minutes. Got: {interval_minutes!r}",
        )

        self.state["reminder_minutes"] = minutes
        self.repository.save_reminder(self.state)
        logger.info("Set %s reminder every %d minutes", self.kind, minutes)

        self.__arm_reminder()

    def cancel_reminder(self) -> None:
        self.__cancel_reminder_task()
        self.state["reminder_minutes"] = None
        self.repository.save_reminder(self.state)
        logger.info("Cancelled %s reminder", self.kind)

    def remind(self, now: Optional[pendulum.DateTime] = None) -> bool:
        """Send reminder_due if the local hour is within the reminder hours."""
        hour = local_hour(now if now is not None else self.clock())
        if self.reminder_start_hour <= hour < self.reminder_end_hour:
            self.reminder_due.send(self.kind)
            return True
        return False

    # ─────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────

    def get_display_state(self) -> DisplayState:
        goal = self.state["goal"]
        total = self.state["running_total"]

        progress = 0.0
        if goal > 0:
            progress = min(total / goal * 100, 100.0)

        return {
            "total": total,
            "remaining": max(goal - total, 0),
            "progress_percent": progress,
        }

    def get_recent_history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> RecentHistory:
        return RecentHistory(self, limit)

    def get_today_detail(self) -> TodayDetail:
        entries = list(self.state["history"].get(self.today, []))
        return {"total": sum(entries), "entries": entries}

    # ─────────────────────────────────────────────────────────────
    # Scheduling
    # ─────────────────────────────────────────────────────────────

    def reload(self) -> None:
        """
        Reread this tracker's state from the store.

        Changes not yet flushed are kept. Once started, the reminder is
        re-armed or cancelled to match the stored interval.
        """
        self.repository.refresh()
        self.state = self.repository.load(self.kind)
        if (
            self.day_boundary_task.is_running
            and self.state["reminder_minutes"] != self._armed_minutes
        ):
            logger.info(
                "Stored %s reminder changed from %s to %s minutes",
                self.kind,
                self._armed_minutes,
                self.state["reminder_minutes"],
            )
            self.__arm_reminder()

    def poll(self) -> bool:
        """Reload, check the day boundary and write the result back."""
        self.reload()
        rolled_over = self.check_day_boundary()
        self.repository.flush()
        return rolled_over

    def start(self) -> None:
        """Start the day-boundary check and any stored reminder."""
        self.day_boundary_task.start()
        if self.state["reminder_minutes"] is not None:
            self.__arm_reminder()

    async def stop(self) -> None:
        try:
            await self.day_boundary_task.stop()
        finally:
            if self.reminder_task is not None:
                reminder_task = self.reminder_task
                self.reminder_task = None
                self._armed_minutes = None
                await reminder_task.stop()

    def __arm_reminder(self) -> None:
        self.__cancel_reminder_task()
        minutes = self.state["reminder_minutes"]
        if minutes is None:
            return

        self.reminder_task = RecurringTask(
            f"{self.kind}-reminder", minutes * 60, self.remind
        )
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # Without a running loop the interval is only stored; start() arms it
            logger.debug("No event loop running; %s reminder not armed", self.kind)
            return
        self.reminder_task.start()
        self._armed_minutes = minutes

    def __cancel_reminder_task(self) -> None:
        if self.reminder_task is not None:
            self.reminder_task.cancel()
            self.reminder_task = None
        self._armed_minutes = None

    # ─────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────

    def __validate_positive_int(
        self,
        value: object,
        error_type: type[IntakeValidationError],
        message: str,
    ) -> int:
        if not is_positive_int(value):
            error = error_type(message)
            self.invalid_input.send(error)
            raise error
        return value  # type: ignore[return-value]

    def __notify_state_changed(self) -> None:
        self.state_changed.send(self.get_display_state())


def load_trackers(
    repository: Optional[TrackerStateRepository] = None,
    clock: Callable[[], pendulum.DateTime] = now_local,
    check_interval_seconds: float = DEFAULT_CHECK_INTERVAL_SECONDS,
    reminder_start_hour: int = DEFAULT_REMINDER_START_HOUR,
    reminder_end_hour: int = DEFAULT_REMINDER_END_HOUR,
) -> dict[QuantityKind, Tracker]:
    """Build one independent tracker per quantity kind over a shared store."""
    shared_repository = (
        repository if repository is not None else TrackerStateRepository()
    )
    return {
        kind: Tracker(
            kind,
            repository=shared_repository,
            clock=clock,
            check_interval_seconds=check_interval_seconds,
            reminder_start_hour=reminder_start_hour,
            reminder_end_hour=reminder_end_hour,
        )
        for kind in QuantityKind
    }
