"""
Pure transformations applied to a rule as the user edits the picker.

Every helper returns a new RecurrenceRule and leaves its input untouched.
"""
from __future__ import annotations

from datetime import date
from typing import Any

from core.models import (
    DAY_OF_MONTH,
    DAY_OF_WEEK,
    DayOfMonth,
    DayOfWeekInMonth,
    Frequency,
    RecurrenceRule,
)
from services.calendar_dates import as_date, parse_weekday_token, weekday_index

MONTHLY_MODE_ALIASES = {
    "day_of_month": DAY_OF_MONTH,
    "dayofmonth": DAY_OF_MONTH,
    "day_of_week": DAY_OF_WEEK,
    "dayofweek": DAY_OF_WEEK,
    "day_of_week_in_month": DAY_OF_WEEK,
}


def _replace(rule: RecurrenceRule, **changes: Any) -> RecurrenceRule:
    data = rule.model_dump()
    data.update(changes)
    return RecurrenceRule.model_validate(data)


def week_order_for(day: date) -> int:
    """Which occurrence of its weekday ``day`` is within its month (1 for days 1-7, ...)."""
    return (day.day + 6) // 7


def day_of_month_mode(start: date) -> DayOfMonth:
    return DayOfMonth(day=start.day)


def day_of_week_mode(start: date) -> DayOfWeekInMonth:
    return DayOfWeekInMonth(week_order=week_order_for(start), day_of_week=weekday_index(start))


def resolve_frequency(value: str | Frequency) -> Frequency:
    if isinstance(value, Frequency):
        return value
    try:
        return Frequency(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unsupported frequency: {value}") from None


def resolve_monthly_mode(value: str) -> str:
    key = str(value).strip().lower().replace("-", "_")
    if key not in MONTHLY_MODE_ALIASES:
        raise ValueError(f"Unsupported monthly mode: {value}")
    return MONTHLY_MODE_ALIASES[key]


def clamp_interval(value: Any) -> int:
    try:
        interval = int(value)
    except (TypeError, ValueError):
        interval = 1
    return max(1, interval)


def default_rule(
    today: date,
    *,
    frequency: Frequency = Frequency.WEEKLY,
    interval: int = 1,
) -> RecurrenceRule:
    """Initial picker state: repeat on today's weekday, starting today, no end."""
    today = as_date(today)
    return RecurrenceRule(
        frequency=frequency,
        interval=clamp_interval(interval),
        days_of_week=frozenset({weekday_index(today)}),
        monthly=day_of_month_mode(today),
        start_date=today,
    )


def with_start_date(rule: RecurrenceRule, start: date) -> RecurrenceRule:
    """Move the start date and re-derive the monthly picker values from it.

    An existing end date that would fall before the new start is pulled up to it.
    """
    start = as_date(start)
    if rule.monthly.type == DAY_OF_MONTH:
        monthly = day_of_month_mode(start)
    else:
        monthly = day_of_week_mode(start)
    end = max(rule.end_date, start) if rule.end_date is not None else None
    return _replace(rule, start_date=start, monthly=monthly, end_date=end)


def toggle_weekday(rule: RecurrenceRule, weekday: int | str) -> RecurrenceRule:
    index = parse_weekday_token(weekday)
    return _replace(rule, days_of_week=rule.days_of_week ^ {index})


def switch_monthly_mode(rule: RecurrenceRule, mode: str) -> RecurrenceRule:
    """
    Switch between "on day N" and "on the n-th weekday".

    The newly active mode is seeded from the start date; choosing the mode
    that is already active keeps its current values.
    """
    mode_type = resolve_monthly_mode(mode)
    if rule.monthly.type == mode_type:
        return rule
    if mode_type == DAY_OF_MONTH:
        return _replace(rule, monthly=day_of_month_mode(rule.start_date))
    return _replace(rule, monthly=day_of_week_mode(rule.start_date))


def with_frequency(rule: RecurrenceRule, frequency: str | Frequency) -> RecurrenceRule:
    return _replace(rule, frequency=resolve_frequency(frequency))


def with_interval(rule: RecurrenceRule, interval: Any) -> RecurrenceRule:
    return _replace(rule, interval=clamp_interval(interval))


def with_end_date(rule: RecurrenceRule, end: date | None) -> RecurrenceRule:
    """Set or clear the end date. An end before the start is pulled up to the start."""
    if end is None:
        return _replace(rule, end_date=None)
    end = as_date(end)
    return _replace(rule, end_date=max(end, rule.start_date))


def toggle_end_date(rule: RecurrenceRule, today: date) -> RecurrenceRule:
    if rule.end_date is not None:
        return with_end_date(rule, None)
    return with_end_date(rule, today)


def with_week_order(rule: RecurrenceRule, week_order: int) -> RecurrenceRule:
    monthly = rule.monthly
    if not isinstance(monthly, DayOfWeekInMonth):
        raise ValueError("Week order only applies to the day-of-week monthly mode")
    return _replace(rule, monthly=DayOfWeekInMonth(week_order=int(week_order), day_of_week=monthly.day_of_week))


def with_day_of_week(rule: RecurrenceRule, weekday: int | str) -> RecurrenceRule:
    monthly = rule.monthly
    if not isinstance(monthly, DayOfWeekInMonth):
        raise ValueError("Weekday only applies to the day-of-week monthly mode")
    return _replace(
        rule,
        monthly=DayOfWeekInMonth(week_order=monthly.week_order, day_of_week=parse_weekday_token(weekday)),
    )
