# SPDX-License-Identifier: MIT

import re
from typing import Union


def parse_int_input(raw_value: str) -> Union[int, str]:
    """
    Read an integer from user input, ignoring surrounding whitespace and a
    trailing unit such as "g" or "ml".

    Input that does not start with an integer is returned unchanged so the
    tracker can reject it with its own validation error.
    """
    match = re.match(r"^\s*([+-]?\d+)\s*[a-zA-Z]*\s*$", raw_value)
    if match is None:
        return raw_value
    return int(match.group(1))
