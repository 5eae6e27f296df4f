from datetime import date

import pytest

import preview_rule
from core.models import DayOfMonth, DayOfWeekInMonth, Frequency


def test_rule_from_args_weekly():
    args = preview_rule.build_parser().parse_args(
        ["weekly", "--days", "mon,wed", "--start", "2024-01-01", "--interval", "2"]
    )

    rule = preview_rule.rule_from_args(args, date(2023, 12, 1))

    assert rule.frequency is Frequency.WEEKLY
    assert rule.interval == 2
    assert rule.days_of_week == frozenset({1, 3})
    assert rule.monthly == DayOfMonth(day=1)


def test_rule_from_args_monthly_weekday():
    args = preview_rule.build_parser().parse_args(
        ["monthly", "--week-order", "3", "--weekday", "tue", "--start", "2024-01-01"]
    )

    rule = preview_rule.rule_from_args(args, date(2023, 12, 1))

    assert rule.monthly == DayOfWeekInMonth(week_order=3, day_of_week=2)


def test_rule_from_args_defaults_to_today():
    args = preview_rule.build_parser().parse_args(["daily"])

    rule = preview_rule.rule_from_args(args, date(2024, 5, 8))

    assert rule.start_date == date(2024, 5, 8)
    assert rule.days_of_week == frozenset({3})


def test_main_prints_dates_and_calendar(capsys):
    exit_code = preview_rule.main(["weekly", "--days", "mon,wed", "--start", "2024-01-01", "--count", "4"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "Every week on Mon, Wed" in output
    assert "2024-01-10  Wed" in output
    assert "January 2024" in output
    assert "Total: 4 date(s)" in output


def test_main_rejects_invalid_rule(capsys):
    exit_code = preview_rule.main(["monthly", "--month-day", "40", "--start", "2024-01-01"])

    assert exit_code == 1
    assert "Invalid rule" in capsys.readouterr().out


def test_main_rejects_unknown_frequency():
    with pytest.raises(SystemExit):
        preview_rule.main(["hourly"])


def test_main_rejects_zero_week_order(capsys):
    exit_code = preview_rule.main(["monthly", "--week-order", "0", "--start", "2024-01-01"])

    assert exit_code == 1
    assert "Invalid rule" in capsys.readouterr().out
