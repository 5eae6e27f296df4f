from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from itertools import islice
from typing import Callable, Dict, Iterable, Iterator, List

from dateutil.relativedelta import relativedelta

from core.models import DayOfMonth, Frequency, RecurrenceRule
from services.calendar_dates import as_date, nth_weekday_of_month, rolled_date, weekday_index

logger = logging.getLogger(__name__)

MAX_COUNT = 100
# Upper bound on periods walked when a rule has no end date and never matches.
MAX_STEPS = 10_000


def _within_bounds(rule: RecurrenceRule, candidate: date) -> bool:
    if candidate < rule.start_date:
        return False
    return rule.end_date is None or candidate <= rule.end_date


def _period_cursors(rule: RecurrenceRule, unit: str, max_steps: int) -> Iterator[date]:
    """
    Yield the start of each period: start, start + interval units, ...

    Each cursor is computed from the start date rather than from the previous
    cursor, so month and year steps never drift when the start day is missing
    from a shorter month.
    """
    for k in range(max_steps):
        try:
            cursor = rule.start_date + relativedelta(**{unit: rule.interval * k})
        except (OverflowError, ValueError):
            # Walked off the end of the supported date range.
            return
        if rule.end_date is not None and cursor > rule.end_date:
            return
        yield cursor
    logger.warning(
        "Recurrence expansion stopped after %d %s periods without filling the cap",
        max_steps,
        rule.frequency.value,
    )


def _daily(rule: RecurrenceRule, max_steps: int) -> Iterator[date]:
    yield from _period_cursors(rule, "days", max_steps)


def _weekly(rule: RecurrenceRule, max_steps: int) -> Iterator[date]:
    for cursor in _period_cursors(rule, "weeks", max_steps):
        for offset in range(7):
            try:
                day = cursor + timedelta(days=offset)
            except OverflowError:
                return
            if rule.end_date is not None and day > rule.end_date:
                return
            if day < rule.start_date:
                continue
            if weekday_index(day) in rule.days_of_week:
                yield day


def _monthly(rule: RecurrenceRule, max_steps: int) -> Iterator[date]:
    mode = rule.monthly
    for cursor in _period_cursors(rule, "months", max_steps):
        if isinstance(mode, DayOfMonth):
            # Day 31 in a 30-day month lands on the 1st of the next month.
            candidate = rolled_date(cursor.year, cursor.month, mode.day)
        else:
            candidate = nth_weekday_of_month(cursor.year, cursor.month, mode.day_of_week, mode.week_order)
        if candidate is not None and _within_bounds(rule, candidate):
            yield candidate


def _yearly(rule: RecurrenceRule, max_steps: int) -> Iterator[date]:
    anchor = rule.start_date
    for cursor in _period_cursors(rule, "years", max_steps):
        # Feb 29 anniversaries fall on Mar 1 in common years.
        candidate = rolled_date(cursor.year, anchor.month, anchor.day)
        if _within_bounds(rule, candidate):
            yield candidate


_GENERATORS: Dict[Frequency, Callable[[RecurrenceRule, int], Iterator[date]]] = {
    Frequency.DAILY: _daily,
    Frequency.WEEKLY: _weekly,
    Frequency.MONTHLY: _monthly,
    Frequency.YEARLY: _yearly,
}


def iter_occurrences(rule: RecurrenceRule, *, max_steps: int = MAX_STEPS) -> Iterator[date]:
    """Lazily yield the occurrences of ``rule`` in generation order, without a count cap."""
    return _GENERATORS[rule.frequency](rule, max_steps)


def expand_occurrences(
    rule: RecurrenceRule,
    *,
    max_count: int = MAX_COUNT,
    max_steps: int = MAX_STEPS,
) -> List[date]:
    """
    Expand a recurrence rule into concrete dates.

    Returns at most ``max_count`` dates, none before the start date or after
    the end date, sorted ascending without duplicates. Degenerate rules (a
    weekly rule with no weekdays, an end date before the start) produce an
    empty list rather than an error.
    """
    occurrences = list(islice(iter_occurrences(rule, max_steps=max_steps), max(0, max_count)))
    logger.debug(
        "Expanded %s rule every %d from %s: %d occurrence(s)",
        rule.frequency.value,
        rule.interval,
        rule.start_date,
        len(occurrences),
    )
    return sorted(set(occurrences))


def occurrence_key(value: date | datetime | str) -> str:
    """Normalize a date, datetime or ISO string to the ``YYYY-MM-DD`` lookup key."""
    if isinstance(value, str):
        return date.fromisoformat(value[:10]).isoformat()
    return as_date(value).isoformat()


class OccurrenceSet:
    """Membership lookup over an occurrence list, used to highlight calendar cells."""

    def __init__(self, occurrences: Iterable[date]):
        self._keys = frozenset(occurrence_key(item) for item in occurrences)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (date, str)):
            return False
        try:
            return occurrence_key(value) in self._keys
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._keys))
