from datetime import date, datetime

import pytest

from shift_attendance.common.datetime_utils import (
    format_time_of_day,
    iter_dates,
    month_bounds,
    now_local,
    parse_iso_date,
)


def test_iter_dates_crosses_month_boundary():
    days = list(iter_dates(date(2026, 1, 30), date(2026, 2, 2)))

    assert days == [date(2026, 1, 30), date(2026, 1, 31), date(2026, 2, 1), date(2026, 2, 2)]


def test_iter_dates_single_day_and_empty():
    assert list(iter_dates(date(2026, 3, 1), date(2026, 3, 1))) == [date(2026, 3, 1)]
    assert list(iter_dates(date(2026, 3, 2), date(2026, 3, 1))) == []


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2026, 2, 14), (date(2026, 2, 1), date(2026, 2, 28))),
        (date(2024, 2, 1), (date(2024, 2, 1), date(2024, 2, 29))),
        (date(2026, 12, 31), (date(2026, 12, 1), date(2026, 12, 31))),
    ],
)
def test_month_bounds(day, expected):
    assert month_bounds(day) == expected


def test_parse_iso_date_rejects_garbage():
    assert parse_iso_date("2026-01-05") == date(2026, 1, 5)
    with pytest.raises(ValueError):
        parse_iso_date("05/01/2026")


def test_format_time_of_day():
    assert format_time_of_day(datetime(2026, 1, 1, 7, 5, 59), "-") == "07:05"
    assert format_time_of_day(None, "Not recorded") == "Not recorded"


def test_now_local_is_naive():
    assert now_local("America/Argentina/Buenos_Aires").tzinfo is None
