from datetime import date, datetime, time

import pytz

from ponto.services.time_rules import (
    floor_minutes_between,
    format_balance,
    format_minutes,
    local_day_bounds_utc,
    minutes_between,
    minutes_of_day,
    utc_to_local,
)


def test_minutes_of_day_ignores_seconds():
    assert minutes_of_day(time(8, 30, 59)) == 510
    assert minutes_of_day(datetime(2024, 3, 4, 0, 0)) == 0


def test_minutes_between_truncates_toward_zero():
    start = datetime(2024, 3, 4, 8, 0, 0)
    assert minutes_between(start, datetime(2024, 3, 4, 8, 1, 59)) == 1
    assert minutes_between(start, datetime(2024, 3, 4, 7, 58, 30)) == -1
    assert floor_minutes_between(start, datetime(2024, 3, 4, 7, 58, 30)) == -2


def test_utc_to_local():
    local = utc_to_local(datetime(2024, 3, 4, 13, 0))
    assert (local.hour, local.minute) == (10, 0)
    assert local.date() == date(2024, 3, 4)

    late = utc_to_local(datetime(2024, 3, 5, 2, 30, tzinfo=pytz.UTC))
    assert late.date() == date(2024, 3, 4)


def test_local_day_bounds():
    start, end = local_day_bounds_utc(date(2024, 3, 4))
    assert start == datetime(2024, 3, 4, 3, 0, tzinfo=pytz.UTC)
    assert end == datetime(2024, 3, 5, 3, 0, tzinfo=pytz.UTC)


def test_formatting():
    assert format_minutes(0) == "-"
    assert format_minutes(485) == "08:05"
    assert format_balance(5) == "+00:05"
    assert format_balance(-480) == "-08:00"
    assert format_balance(0) == "+00:00"
