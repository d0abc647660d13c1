import pendulum
import pytest

from dailyintake.time import (
    calendar_date,
    date_from_storage_str,
    date_to_storage_str,
    local_hour,
)


def test_storage_format_is_zero_padded_day_month_year():
    assert date_to_storage_str(pendulum.date(2024, 3, 5)) == "05/03/2024"


def test_parse_storage_date():
    assert date_from_storage_str("05/03/2024") == pendulum.date(2024, 3, 5)
    # The browser version wrote padded dates, but hand edits may not be
    assert date_from_storage_str("5/3/2024") == pendulum.date(2024, 3, 5)


@pytest.mark.parametrize("value", ["2024-03-05", "31/02/2024", "not a date", ""])
def test_parse_storage_date_rejects_invalid(value):
    with pytest.raises(ValueError):
        date_from_storage_str(value)


def test_calendar_date_drops_time_component():
    moment = pendulum.datetime(2024, 12, 31, 23, 59, 59, tz="local")
    assert calendar_date(moment) == pendulum.date(2024, 12, 31)
    assert local_hour(moment) == 23


def test_date_ordering_ignores_string_order():
    # "02/01/2025" sorts before "31/12/2024" as a string
    dates = [
        date_from_storage_str("31/12/2024"),
        date_from_storage_str("02/01/2025"),
        date_from_storage_str("15/06/2024"),
    ]
    assert sorted(dates, reverse=True) == [
        pendulum.date(2025, 1, 2),
        pendulum.date(2024, 12, 31),
        pendulum.date(2024, 6, 15),
    ]
