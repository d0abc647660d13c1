# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

STORAGE_DATE_FORMAT = "DD/MM/YYYY"


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def calendar_date(datetime: pendulum.DateTime) -> pendulum.Date:
    """Return the local calendar date of a moment, dropping the time component."""
    return datetime.in_tz("local").date()


def local_hour(datetime: pendulum.DateTime) -> int:
    return datetime.in_tz("local").hour


def date_to_storage_str(date: pendulum.Date) -> str:
    return date.format(STORAGE_DATE_FORMAT)


def date_to_storage_str_optional(date: Optional[pendulum.Date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_storage_str(date)


def date_from_storage_str(date_str: str) -> pendulum.Date:
    """
    Parse a 'DD/MM/YYYY' string back into a calendar date.

    Raises ValueError if the string is not a valid date in that format.
    """
    parts = date_str.strip().split("/")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Expected a DD/MM/YYYY date, got {date_str!r}")
    day, month, year = map(int, parts)
    return pendulum.date(year, month, day)


def date_from_storage_str_optional(
    date_str: Optional[str],
) -> Optional[pendulum.Date]:
    if date_str is None:
        return None
    return date_from_storage_str(date_str)


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("DD/MM/YYYY ddd")
