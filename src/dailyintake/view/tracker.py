# SPDX-License-Identifier: MIT

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.progress_bar import ProgressBar
from rich.table import Table

from dailyintake.model.quantity import QuantityKind
from dailyintake.model.tracker_state import DisplayState, HistoryDay, TodayDetail
from dailyintake.time import date_to_display_str
from dailyintake.view.header import header


def format_amount(amount: int, unit: str) -> str:
    return f"{amount} {unit}"


def status_view(
    kind: QuantityKind,
    goal: int,
    display_state: DisplayState,
    reminder_minutes: Optional[int] = None,
) -> None:
    """
    Display the running total against the goal.

    property   value
    ───────────────────────────────
    total      60 g
    goal       50 g
    remaining  0 g
    progress   ━━━━━━━━━━━━━━━━━━━━ 100%
    """
    header(kind, "status")

    status_table = Table(box=box.SIMPLE)
    status_table.add_column("property")
    status_table.add_column("value")

    status_table.add_row("total", format_amount(display_state["total"], kind.unit))
    status_table.add_row(
        "goal", format_amount(goal, kind.unit) if goal > 0 else "not set"
    )
    status_table.add_row(
        "remaining", format_amount(display_state["remaining"], kind.unit)
    )

    progress = display_state["progress_percent"]
    progress_table = Table.grid(padding=(0, 1))
    progress_table.add_row(
        ProgressBar(total=100, completed=progress, width=20),
        f"{progress:.0f}%",
    )
    status_table.add_row("progress", progress_table)

    if reminder_minutes is not None:
        status_table.add_row("reminder", f"every {reminder_minutes} min")

    console = Console()
    console.print(status_table)


def history_view(kind: QuantityKind, days: Iterable[HistoryDay]) -> None:
    """Display the most recent days with their totals, newest first."""
    header(kind, "weekly data")

    history_table = Table(box=box.SIMPLE)
    history_table.add_column("date")
    history_table.add_column("total", justify="right")

    row_count = 0
    for day in days:
        history_table.add_row(
            date_to_display_str(day["date"]), format_amount(day["total"], kind.unit)
        )
        row_count += 1

    console = Console()
    if row_count == 0:
        console.print(f"[yellow]No {kind} history yet.[/yellow]")
        return
    console.print(history_table)


def today_view(kind: QuantityKind, detail: TodayDetail) -> None:
    """Display today's total followed by each logged amount."""
    header(kind, "today")

    console = Console()
    console.print(f"[bold]Total: {format_amount(detail['total'], kind.unit)}[/bold]")

    if len(detail["entries"]) == 0:
        console.print(f"No {kind} intake logged yet today.")
        return

    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("#", justify="right")
    entries_table.add_column("amount", justify="right")
    for index, amount in enumerate(detail["entries"], start=1):
        entries_table.add_row(str(index), format_amount(amount, kind.unit))
    console.print(entries_table)
