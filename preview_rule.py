#!/usr/bin/env python3
"""
Print the occurrences of a recurrence rule without starting the API.

Usage:
    python preview_rule.py weekly --days mon,wed --start 2024-01-01
    python preview_rule.py monthly --week-order 3 --weekday tue --interval 2
    python preview_rule.py yearly --start 2024-02-29 --end 2030-12-31

Options:
    --interval N: repeat every N days/weeks/months/years (default 1)
    --days: comma separated weekdays for weekly rules
    --start / --end: ISO or natural language dates ("next monday")
    --month-day N: monthly rule on day N
    --week-order N --weekday DAY: monthly rule on the N-th DAY
    --count N: cap on the number of dates (default from settings)
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from core.config import get_settings
from core.logging import configure_logging
from core.models import DayOfMonth, DayOfWeekInMonth, RecurrenceRule
from core.time_utils import current_date, parse_rule_date
from services.calendar_dates import parse_weekday_token, weekday_index
from services.calendar_preview import build_preview, render_month
from services.rule_editing import clamp_interval, day_of_month_mode, day_of_week_mode, resolve_frequency


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Preview the dates of a recurring rule")
    parser.add_argument("frequency", choices=["daily", "weekly", "monthly", "yearly"])
    parser.add_argument("--interval", default=1)
    parser.add_argument("--days", default=None)
    parser.add_argument("--start", default=None)
    parser.add_argument("--end", default=None)
    parser.add_argument("--month-day", type=int, default=None)
    parser.add_argument("--week-order", type=int, default=None)
    parser.add_argument("--weekday", default=None)
    parser.add_argument("--count", type=int, default=None)
    return parser


def rule_from_args(args: argparse.Namespace, today) -> RecurrenceRule:
    start = parse_rule_date(args.start, today) if args.start else today
    end = parse_rule_date(args.end, today) if args.end else None

    if args.days:
        days_of_week = frozenset(parse_weekday_token(token) for token in args.days.split(","))
    else:
        days_of_week = frozenset({weekday_index(start)})

    if args.week_order is not None or args.weekday is not None:
        derived = day_of_week_mode(start)
        monthly = DayOfWeekInMonth(
            week_order=args.week_order if args.week_order is not None else derived.week_order,
            day_of_week=parse_weekday_token(args.weekday) if args.weekday else derived.day_of_week,
        )
    elif args.month_day is not None:
        monthly = DayOfMonth(day=args.month_day)
    else:
        monthly = day_of_month_mode(start)

    return RecurrenceRule(
        frequency=resolve_frequency(args.frequency),
        interval=clamp_interval(args.interval),
        days_of_week=days_of_week,
        monthly=monthly,
        start_date=start,
        end_date=end,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        rule = rule_from_args(args, current_date(settings.timezone))
    except ValueError as e:
        print(f"✗ Invalid rule: {e}")
        return 1

    max_count = args.count if args.count is not None else settings.max_count
    preview = build_preview(rule, max_count=max_count, max_steps=settings.max_steps)

    print("=" * 40)
    print(preview.summary)
    print("=" * 40)
    if not preview.dates:
        print("No occurrences.")
    for occurrence in preview.dates:
        print(f"  {occurrence.isoformat()}  {occurrence.strftime('%a')}")
    print()
    print(render_month(preview.calendar))
    print()
    print(f"Total: {preview.count} date(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
