from __future__ import annotations

from core.models import DayOfMonth, Frequency, RecurrenceRule
from services.calendar_dates import MONTH_NAMES, WEEKDAY_NAMES

UNIT_NAMES = {
    Frequency.DAILY: "day",
    Frequency.WEEKLY: "week",
    Frequency.MONTHLY: "month",
    Frequency.YEARLY: "year",
}

WEEK_ORDER_LABELS = {
    1: "first",
    2: "second",
    3: "third",
    4: "fourth",
    5: "fifth",
}


def summarize(rule: RecurrenceRule) -> str:
    """Describe a rule the way the picker shows it, e.g. "Every 2 weeks on Mon, Wed"."""
    unit = UNIT_NAMES[rule.frequency]
    if rule.interval > 1:
        summary = f"Every {rule.interval} {unit}s"
    else:
        summary = f"Every {unit}"

    if rule.frequency == Frequency.WEEKLY and rule.days_of_week:
        summary += " on " + ", ".join(WEEKDAY_NAMES[d] for d in sorted(rule.days_of_week))
    elif rule.frequency == Frequency.MONTHLY:
        monthly = rule.monthly
        if isinstance(monthly, DayOfMonth):
            summary += f" on day {monthly.day}"
        else:
            summary += f" on the {WEEK_ORDER_LABELS[monthly.week_order]} {WEEKDAY_NAMES[monthly.day_of_week]}"
    elif rule.frequency == Frequency.YEARLY:
        start = rule.start_date
        summary += f" on {MONTH_NAMES[start.month - 1][:3]} {start.day}"
    return summary
