# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console

from dailyintake.model.quantity import QuantityKind
from dailyintake.repository.configuration import CONFIGURATION_REPO
from dailyintake.repository.store import STORE
from dailyintake.repository.tracker_state import TrackerStateRepository
from dailyintake.service.tracker import IntakeValidationError, Tracker
from dailyintake.terminal.custom_typer import AliasedTyperGroup
from dailyintake.terminal.parse import parse_int_input
from dailyintake.view import tracker as tracker_view


def load_tracker(kind: QuantityKind) -> Tracker:
    """Load a tracker from the store and roll it over if the day has changed."""
    config = CONFIGURATION_REPO.get_config()
    tracker = Tracker(
        kind,
        repository=TrackerStateRepository(STORE),
        check_interval_seconds=config["check_interval_seconds"],
        reminder_start_hour=config["reminder_start_hour"],
        reminder_end_hour=config["reminder_end_hour"],
    )
    tracker.check_day_boundary()
    return tracker


def show_status(tracker: Tracker) -> None:
    tracker_view.status_view(
        tracker.kind,
        tracker.goal,
        tracker.get_display_state(),
        tracker.reminder_minutes,
    )


def build_tracker_app(kind: QuantityKind) -> typer.Typer:
    """Build the command group for one quantity kind."""
    app = typer.Typer(
        cls=AliasedTyperGroup,
        no_args_is_help=True,
        help=f"Track {kind} intake ({kind.unit})",
    )

    @app.command("goal, g", no_args_is_help=True)
    def goal(
        value: Annotated[str, typer.Argument(help=f"Daily goal in {kind.unit}")],
    ) -> None:
        """Set the daily goal."""
        tracker = load_tracker(kind)
        try:
            tracker.set_goal(parse_int_input(value))
        except IntakeValidationError as e:
            typer.echo(f"Error: {e}")
            raise typer.Exit(1)

        show_status(tracker)

    @app.command("add, a", no_args_is_help=True)
    def add(
        amount: Annotated[str, typer.Argument(help=f"Amount in {kind.unit}")],
    ) -> None:
        """Log an intake amount for today."""
        tracker = load_tracker(kind)
        try:
            tracker.log_intake(parse_int_input(amount))
        except IntakeValidationError as e:
            typer.echo(f"Error: {e}")
            raise typer.Exit(1)

        show_status(tracker)

    @app.command("status, s")
    def status() -> None:
        """Show today's total, the goal and progress."""
        show_status(load_tracker(kind))

    @app.command("history, h")
    def history(
        limit: Annotated[
            Optional[int],
            typer.Option(
                "--limit",
                "-l",
                min=0,
                help="Number of days to show (default: history_limit setting)",
            ),
        ] = None,
    ) -> None:
        """Show the totals of the most recent days."""
        tracker = load_tracker(kind)
        if limit is None:
            limit = CONFIGURATION_REPO.get_config()["history_limit"]
        tracker_view.history_view(kind, tracker.get_recent_history(limit))

    @app.command("today, t")
    def today() -> None:
        """Show every amount logged today."""
        tracker = load_tracker(kind)
        tracker_view.today_view(kind, tracker.get_today_detail())

    @app.command("reset-daily, rd")
    def reset_daily() -> None:
        """Clear today's intake."""
        tracker = load_tracker(kind)
        tracker.reset_daily()
        show_status(tracker)

    @app.command("reset-all, ra")
    def reset_all(
        yes: Annotated[
            bool,
            typer.Option("--yes", "-y", help="Skip the confirmation prompt"),
        ] = False,
    ) -> None:
        """Erase the goal, reminder and all history."""
        tracker = load_tracker(kind)
        console = Console()

        def confirm(requested_kind: QuantityKind) -> None:
            console.print(
                f"[yellow]This will erase all {requested_kind} data and cannot be undone.[/yellow]"
            )

        tracker.confirm_reset_requested.connect(confirm)

        if not tracker.reset_all(confirmed=yes):
            if not typer.confirm("Are you sure you want to reset all data?"):
                console.print("[cyan]Operation cancelled.[/cyan]")
                raise typer.Exit()
            tracker.reset_all(confirmed=True)

        console.print(f"[green]All {kind} data has been reset![/green]")

    @app.command("reminder, r", no_args_is_help=True)
    def reminder(
        minutes: Annotated[str, typer.Argument(help="Reminder interval in minutes")],
    ) -> None:
        """Remind every N minutes between the reminder hours while watching."""
        tracker = load_tracker(kind)
        try:
            tracker.set_reminder(parse_int_input(minutes))
        except IntakeValidationError as e:
            typer.echo(f"Error: {e}")
            raise typer.Exit(1)

        config = CONFIGURATION_REPO.get_config()
        typer.echo(
            f"Reminder set! You'll be notified every {tracker.reminder_minutes} minutes "
            f"between {config['reminder_start_hour']}:00 and "
            f"{config['reminder_end_hour']}:00 while `dailyintake watch` runs."
        )

    @app.command("reminder-off, ro")
    def reminder_off() -> None:
        """Stop reminding."""
        tracker = load_tracker(kind)
        tracker.cancel_reminder()
        typer.echo(f"Reminder for {kind} removed.")

    return app
