# SPDX-License-Identifier: MIT

import asyncio
import logging
from typing import Annotated, Optional

import typer
from rich.console import Console

from dailyintake.model.quantity import QuantityKind
from dailyintake.model.tracker_state import DisplayState
from dailyintake.repository.store import STORE, StorageError
from dailyintake.service.tracker import Tracker
from dailyintake.terminal.tracker import load_tracker

logger = logging.getLogger(__name__)

console = Console()


def _connect_notifications(tracker: Tracker) -> None:
    def on_reminder_due(kind: QuantityKind) -> None:
        console.print(f"[bold cyan]Time to log your {kind} intake![/bold cyan]")

    def on_state_changed(display_state: DisplayState) -> None:
        console.print(
            f"[plum1]{tracker.kind}[/plum1] total {display_state['total']} "
            f"{tracker.unit}, {display_state['remaining']} {tracker.unit} remaining"
        )

    tracker.reminder_due.connect(on_reminder_due)
    tracker.state_changed.connect(on_state_changed)


async def watch_trackers(trackers: list[Tracker], flush_interval: float) -> None:
    """Run the trackers' day-boundary checks and reminders until cancelled."""
    for tracker in trackers:
        tracker.start()
    try:
        while True:
            await asyncio.sleep(flush_interval)
            STORE.flush()
    finally:
        errors: list[StorageError] = []
        for tracker in trackers:
            try:
                await tracker.stop()
            except StorageError as e:
                logger.error(
                    "Stopped watching %s after a storage error: %s", tracker.kind, e
                )
                errors.append(e)
        if errors:
            raise errors[0]
        STORE.flush()


def watch(
    kind: Annotated[
        Optional[QuantityKind],
        typer.Option("--kind", "-k", help="Only watch this quantity"),
    ] = None,
) -> None:
    """Keep running to roll totals over at midnight and send reminders."""
    kinds = [kind] if kind is not None else list(QuantityKind)
    trackers = [load_tracker(k) for k in kinds]
    for tracker in trackers:
        _connect_notifications(tracker)

    console.print(
        f"Watching {', '.join(str(k) for k in kinds)}. Press Ctrl+C to stop."
    )
    try:
        asyncio.run(
            watch_trackers(trackers, trackers[0].day_boundary_task.interval)
        )
    except KeyboardInterrupt:
        logger.info("Watch interrupted")
        console.print("[cyan]Stopped watching.[/cyan]")
