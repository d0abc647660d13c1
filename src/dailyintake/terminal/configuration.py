# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from dailyintake import configuration
from dailyintake.repository.configuration import CONFIGURATION_REPO
from dailyintake.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _configuration_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("history_limit", str(config["history_limit"]))
    table.add_row("check_interval_seconds", str(config["check_interval_seconds"]))
    table.add_row("reminder_start_hour", str(config["reminder_start_hour"]))
    table.add_row("reminder_end_hour", str(config["reminder_end_hour"]))
    table.add_row("log_level", config.get("log_level", "WARNING"))
    table.add_row("data_path", str(configuration.DATA_PATH))
    return table


@app.command("show, v")
def show() -> None:
    """Display current configuration settings."""
    console = Console()
    console.print(_configuration_table())


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above views",
        ),
    ] = None,
    history_limit: Annotated[
        Optional[int],
        typer.Option("--history-limit", min=1, help="Days shown by history"),
    ] = None,
    check_interval_seconds: Annotated[
        Optional[int],
        typer.Option(
            "--check-interval-seconds",
            min=1,
            max=60,
            help="Seconds between day rollover checks while watching",
        ),
    ] = None,
    reminder_start_hour: Annotated[
        Optional[int],
        typer.Option("--reminder-start-hour", min=0, max=23),
    ] = None,
    reminder_end_hour: Annotated[
        Optional[int],
        typer.Option("--reminder-end-hour", min=1, max=24),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=", ".join(LOG_LEVELS)),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory for the data store"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    config = CONFIGURATION_REPO.get_config()

    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}"
            )

    start_hour = (
        reminder_start_hour
        if reminder_start_hour is not None
        else config["reminder_start_hour"]
    )
    end_hour = (
        reminder_end_hour if reminder_end_hour is not None else config["reminder_end_hour"]
    )
    if start_hour >= end_hour:
        raise typer.BadParameter("Reminder start hour must be before the end hour")

    CONFIGURATION_REPO.update_config(
        show_header=show_header,
        history_limit=history_limit,
        check_interval_seconds=check_interval_seconds,
        reminder_start_hour=reminder_start_hour,
        reminder_end_hour=reminder_end_hour,
        log_level=log_level,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table("Updated Configuration"))
