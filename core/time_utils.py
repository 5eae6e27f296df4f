from __future__ import annotations

from datetime import date, datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dateparser


def get_timezone(tz_name: str) -> ZoneInfo:
    # Unknown keys raise ZoneInfoNotFoundError, malformed paths ValueError.
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ValueError(f"Invalid timezone '{tz_name}': {exc}") from exc


def current_date(tz_name: str) -> date:
    """Today's calendar date in the given timezone."""
    return datetime.now(get_timezone(tz_name)).date()


def parse_rule_date(value: str | date, today: date) -> date:
    """Parse ISO or natural language date strings ("next friday") relative to ``today``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        raise ValueError("Date value is empty")

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    parsed = dateparser.parse(
        text,
        settings={
            "RELATIVE_BASE": datetime.combine(today, time()),
            "PREFER_DATES_FROM": "future",
        },
    )
    if not parsed:
        raise ValueError(f"Unable to parse date value '{value}'")
    return parsed.date()
