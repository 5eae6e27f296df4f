from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.main import app
from core.config import Settings, get_settings
from core.models import DayOfMonth, DayOfWeekInMonth, Frequency, RecurrenceRule


def _build_rule(**overrides) -> RecurrenceRule:
    """A weekly Monday rule starting Monday 2024-01-01, with overrides applied."""
    fields = {
        "frequency": Frequency.WEEKLY,
        "interval": 1,
        "days_of_week": {1},
        "monthly": DayOfMonth(day=1),
        "start_date": date(2024, 1, 1),
        "end_date": None,
    }
    fields.update(overrides)
    return RecurrenceRule(**fields)


@pytest.fixture()
def make_rule():
    return _build_rule


@pytest.fixture()
def weekly_rule() -> RecurrenceRule:
    return _build_rule(days_of_week={1, 3})


@pytest.fixture()
def third_tuesday_rule() -> RecurrenceRule:
    return _build_rule(
        frequency=Frequency.MONTHLY,
        monthly=DayOfWeekInMonth(week_order=3, day_of_week=2),
    )


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(timezone="UTC", config_path=str(tmp_path / "config.yaml"))


@pytest.fixture()
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
