# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from dailyintake.model.quantity import QuantityKind
from dailyintake.terminal import configuration
from dailyintake.terminal.custom_typer import OrderedAliasedTyperGroup
from dailyintake.terminal.tracker import build_tracker_app
from dailyintake.terminal.watch import watch
from dailyintake.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="dailyintake - Daily protein and water intake in the CLI",
    no_args_is_help=True,
)
for kind in QuantityKind:
    app.add_typer(build_tracker_app(kind), name=f"{kind}, {kind[0]}")
app.add_typer(configuration.app, name="config, c")
app.command(name="watch")(watch)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
) -> None:
    """
    dailyintake - Daily protein and water intake in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
