# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from dailyintake.view.state import get_show_header


def header(kind: str, sub_header: Optional[str] = None) -> None:
    """Print the application header with the tracked quantity.

    Args:
        kind: The quantity kind being shown
        sub_header: Optional sub-header text to display
    """
    if not get_show_header():
        return

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"
    kind = f"[plum1]{kind}[/plum1]"

    print(Padding("[dark_orange]dailyintake[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(additional, (0, 1)))
    print(Padding(kind, (0, 1)))
