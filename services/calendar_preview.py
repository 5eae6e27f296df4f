"""Month grid shown next to the picker, with occurrence days marked."""
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field

from core.models import RecurrenceRule
from services.calendar_dates import MONTH_NAMES, WEEKDAY_NAMES, days_in_month, first_weekday_of_month
from services.recurrence import MAX_COUNT, MAX_STEPS, OccurrenceSet, expand_occurrences
from services.summary import summarize


class MonthView(BaseModel):
    year: int
    month: int
    title: str
    weekday_headers: List[str] = Field(default_factory=lambda: [name[0] for name in WEEKDAY_NAMES])
    # Leading None cells pad the first week up to the 1st's weekday (Sunday first).
    cells: List[Optional[int]]
    highlighted: List[int] = Field(default_factory=list)

    @property
    def weeks(self) -> List[List[Optional[int]]]:
        padded = self.cells + [None] * (-len(self.cells) % 7)
        return [padded[i : i + 7] for i in range(0, len(padded), 7)]


class RecurrencePreview(BaseModel):
    rule: RecurrenceRule
    summary: str
    dates: List[date]
    count: int
    calendar: MonthView


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move ``offset`` months forward (or back when negative) from year/month."""
    shifted = date(year, month, 1) + relativedelta(months=offset)
    return shifted.year, shifted.month


def build_month_view(occurrences: Iterable[date] | OccurrenceSet, year: int, month: int) -> MonthView:
    lookup = occurrences if isinstance(occurrences, OccurrenceSet) else OccurrenceSet(occurrences)
    total_days = days_in_month(year, month)
    cells: List[Optional[int]] = [None] * first_weekday_of_month(year, month)
    cells.extend(range(1, total_days + 1))
    highlighted = [day for day in range(1, total_days + 1) if date(year, month, day) in lookup]
    return MonthView(
        year=year,
        month=month,
        title=f"{MONTH_NAMES[month - 1]} {year}",
        cells=cells,
        highlighted=highlighted,
    )


def build_preview(
    rule: RecurrenceRule,
    *,
    view_year: int | None = None,
    view_month: int | None = None,
    max_count: int = MAX_COUNT,
    max_steps: int = MAX_STEPS,
) -> RecurrencePreview:
    """Expand ``rule`` and lay out one month of it; the month defaults to the start month."""
    dates = expand_occurrences(rule, max_count=max_count, max_steps=max_steps)
    year = view_year or rule.start_date.year
    month = view_month or rule.start_date.month
    return RecurrencePreview(
        rule=rule,
        summary=summarize(rule),
        dates=dates,
        count=len(dates),
        calendar=build_month_view(dates, year, month),
    )


def render_month(view: MonthView) -> str:
    """Plain-text month grid; occurrence days carry a trailing ``*``."""
    highlighted = set(view.highlighted)
    lines = [view.title.center(28).rstrip(), "".join(f"{h:>4}" for h in view.weekday_headers)]
    for week in view.weeks:
        row = ""
        for day in week:
            if day is None:
                row += "    "
            elif day in highlighted:
                row += f"{day:>3}*"
            else:
                row += f"{day:>3} "
        lines.append(row.rstrip())
    return "\n".join(lines)
