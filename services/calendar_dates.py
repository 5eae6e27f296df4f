"""Calendar arithmetic shared by the recurrence engine and the month preview.

Weekday indices follow the picker's convention: Sunday=0 through Saturday=6.
Months are 1-indexed like ``datetime.date``.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta

WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

WEEKDAY_LOOKUP = {
    "sun": 0,
    "mon": 1,
    "tue": 2,
    "wed": 3,
    "thu": 4,
    "fri": 5,
    "sat": 6,
}

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year``."""
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def weekday_index(day: date) -> int:
    """Sunday-based weekday index of ``day`` (Python's ``weekday()`` is Monday-based)."""
    return (day.weekday() + 1) % 7


def first_weekday_of_month(year: int, month: int) -> int:
    return weekday_index(date(year, month, 1))


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date | None:
    """
    Return the n-th ``weekday`` of the month, e.g. the third Tuesday.

    Returns None when the month has fewer than ``n`` such weekdays
    (a fifth Friday in a month with four).
    """
    count = 0
    for day in range(1, days_in_month(year, month) + 1):
        candidate = date(year, month, day)
        if weekday_index(candidate) == weekday:
            count += 1
            if count == n:
                return candidate
    return None


def rolled_date(year: int, month: int, day: int) -> date:
    """
    Build a date, letting a day past the end of the month spill into the next.

    ``rolled_date(2023, 2, 31)`` is March 3rd, ``rolled_date(2024, 2, 31)`` is
    March 2nd. Monthly day-of-month rules and Feb 29 anniversaries rely on this.
    """
    return date(year, month, 1) + timedelta(days=day - 1)


def as_date(value: date | datetime) -> date:
    """Drop the time of day from a datetime; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_weekday_token(token: str | int) -> int:
    """Resolve "mon", "Monday" or 1 to a Sunday-based weekday index."""
    if isinstance(token, int):
        if not 0 <= token <= 6:
            raise ValueError(f"Weekday index out of range: {token}")
        return token
    key = str(token).strip().lower()
    if key.isdigit():
        return parse_weekday_token(int(key))
    if key[:3] in WEEKDAY_LOOKUP:
        return WEEKDAY_LOOKUP[key[:3]]
    raise ValueError(f"Unknown weekday: {token}")
