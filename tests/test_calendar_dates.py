from datetime import date, datetime

import pytest

from services.calendar_dates import (
    as_date,
    days_in_month,
    first_weekday_of_month,
    is_leap_year,
    nth_weekday_of_month,
    parse_weekday_token,
    rolled_date,
    weekday_index,
)


@pytest.mark.parametrize(
    "year, month, expected",
    [
        (2024, 1, 31),
        (2024, 2, 29),
        (2023, 2, 28),
        (1900, 2, 28),  # divisible by 100, not by 400
        (2000, 2, 29),  # divisible by 400
        (2024, 4, 30),
        (2024, 9, 30),
        (2024, 12, 31),
    ],
)
def test_days_in_month(year, month, expected):
    assert days_in_month(year, month) == expected


def test_is_leap_year():
    assert is_leap_year(2024)
    assert not is_leap_year(2023)
    assert not is_leap_year(2100)
    assert is_leap_year(2400)


def test_weekday_index_is_sunday_based():
    assert weekday_index(date(2024, 1, 7)) == 0  # Sunday
    assert weekday_index(date(2024, 1, 1)) == 1  # Monday
    assert weekday_index(date(2024, 1, 6)) == 6  # Saturday


def test_first_weekday_of_month():
    assert first_weekday_of_month(2024, 1) == 1
    assert first_weekday_of_month(2024, 2) == 4
    assert first_weekday_of_month(2024, 9) == 0


def test_nth_weekday_of_month_finds_third_tuesday():
    assert nth_weekday_of_month(2024, 1, 2, 3) == date(2024, 1, 16)
    assert nth_weekday_of_month(2024, 2, 2, 3) == date(2024, 2, 20)


def test_nth_weekday_of_month_first_day_counts():
    # March 1st 2024 is a Friday
    assert nth_weekday_of_month(2024, 3, 5, 1) == date(2024, 3, 1)
    assert nth_weekday_of_month(2024, 3, 5, 5) == date(2024, 3, 29)


def test_nth_weekday_of_month_missing_fifth_weekday():
    assert nth_weekday_of_month(2024, 2, 5, 5) is None
    assert nth_weekday_of_month(2024, 4, 5, 5) is None


def test_rolled_date_spills_into_next_month():
    assert rolled_date(2023, 2, 31) == date(2023, 3, 3)
    assert rolled_date(2024, 2, 31) == date(2024, 3, 2)
    assert rolled_date(2025, 2, 29) == date(2025, 3, 1)
    assert rolled_date(2024, 4, 31) == date(2024, 5, 1)
    assert rolled_date(2024, 1, 15) == date(2024, 1, 15)


def test_as_date_drops_time():
    assert as_date(datetime(2024, 1, 1, 18, 30)) == date(2024, 1, 1)
    assert as_date(date(2024, 1, 1)) == date(2024, 1, 1)


@pytest.mark.parametrize(
    "token, expected",
    [("sun", 0), ("Mon", 1), ("wednesday", 3), (" SAT ", 6), (5, 5), ("2", 2)],
)
def test_parse_weekday_token(token, expected):
    assert parse_weekday_token(token) == expected


@pytest.mark.parametrize("token", ["funday", 7, "9", -1, None])
def test_parse_weekday_token_rejects_unknown(token):
    with pytest.raises(ValueError):
        parse_weekday_token(token)
