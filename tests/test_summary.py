from datetime import date

import pytest

from core.models import DayOfMonth, DayOfWeekInMonth, Frequency
from services.summary import summarize


@pytest.mark.parametrize(
    "overrides, expected",
    [
        ({"frequency": Frequency.DAILY}, "Every day"),
        ({"frequency": Frequency.DAILY, "interval": 3}, "Every 3 days"),
        ({"days_of_week": {3, 1}}, "Every week on Mon, Wed"),
        ({"days_of_week": {6, 0}, "interval": 2}, "Every 2 weeks on Sun, Sat"),
        ({"days_of_week": set()}, "Every week"),
        (
            {"frequency": Frequency.MONTHLY, "monthly": DayOfMonth(day=15)},
            "Every month on day 15",
        ),
        (
            {
                "frequency": Frequency.MONTHLY,
                "interval": 2,
                "monthly": DayOfWeekInMonth(week_order=3, day_of_week=2),
            },
            "Every 2 months on the third Tue",
        ),
        (
            {"frequency": Frequency.MONTHLY, "monthly": DayOfWeekInMonth(week_order=5, day_of_week=5)},
            "Every month on the fifth Fri",
        ),
        (
            {"frequency": Frequency.YEARLY, "start_date": date(2024, 1, 31)},
            "Every year on Jan 31",
        ),
    ],
)
def test_summarize(make_rule, overrides, expected):
    assert summarize(make_rule(**overrides)) == expected


def test_weekdays_only_listed_for_weekly_rules(make_rule):
    rule = make_rule(frequency=Frequency.DAILY, days_of_week={1, 3})

    assert summarize(rule) == "Every day"
