import logging
from datetime import date
from typing import Any, Callable, Dict

from fastapi import APIRouter, Depends

from core.config import Settings, get_settings
from core.models import DAY_OF_MONTH, DayOfMonth, DayOfWeekInMonth, RecurrenceRule
from core.time_utils import current_date, parse_rule_date
from services.calendar_dates import parse_weekday_token
from services.calendar_preview import build_preview
from services.rule_editing import (
    clamp_interval,
    day_of_month_mode,
    day_of_week_mode,
    default_rule,
    resolve_frequency,
    resolve_monthly_mode,
    switch_monthly_mode,
    toggle_end_date,
    toggle_weekday,
    with_day_of_week,
    with_end_date,
    with_frequency,
    with_interval,
    with_start_date,
    with_week_order,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _first(payload: dict, *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def _require_object(value: Any, name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object")
    return value


def _build_monthly_mode(monthly_payload: Any, start: date) -> DayOfMonth | DayOfWeekInMonth:
    monthly_payload = _require_object(monthly_payload, "monthly")
    mode_type = resolve_monthly_mode(_first(monthly_payload, "type", "mode") or DAY_OF_MONTH)
    if mode_type == DAY_OF_MONTH:
        day = _first(monthly_payload, "day")
        return DayOfMonth(day=day) if day is not None else day_of_month_mode(start)

    derived = day_of_week_mode(start)
    week_order = _first(monthly_payload, "week_order", "weekOrder")
    weekday = _first(monthly_payload, "day_of_week", "dayOfWeek")
    return DayOfWeekInMonth(
        week_order=week_order if week_order is not None else derived.week_order,
        day_of_week=parse_weekday_token(weekday) if weekday is not None else derived.day_of_week,
    )


def _build_rule(rule_payload: Any, *, today: date) -> RecurrenceRule:
    """Build a rule from a picker payload, filling missing fields the way a new picker would."""
    rule_payload = _require_object(rule_payload, "rule")
    start_raw = _first(rule_payload, "start_date", "startDate")
    start = parse_rule_date(start_raw, today) if start_raw is not None else today
    defaults = default_rule(start)

    end_raw = _first(rule_payload, "end_date", "endDate")
    end = parse_rule_date(end_raw, today) if end_raw else None

    raw_days = _first(rule_payload, "days_of_week", "daysOfWeek", "days")
    if raw_days is None:
        days_of_week = defaults.days_of_week
    else:
        days_of_week = frozenset(parse_weekday_token(token) for token in raw_days)

    frequency = _first(rule_payload, "frequency", "type")
    return RecurrenceRule(
        frequency=resolve_frequency(frequency) if frequency else defaults.frequency,
        interval=clamp_interval(_first(rule_payload, "interval")),
        days_of_week=days_of_week,
        monthly=_build_monthly_mode(_first(rule_payload, "monthly"), start),
        start_date=start,
        end_date=end,
    )


def _preview_payload(rule: RecurrenceRule, view: Any, settings: Settings, today: date) -> dict:
    view_year = view_month = None
    if view:
        view_date = parse_rule_date(f"{view}-01" if len(str(view)) == 7 else view, today)
        view_year, view_month = view_date.year, view_date.month
    preview = build_preview(
        rule,
        view_year=view_year,
        view_month=view_month,
        max_count=settings.max_count,
        max_steps=settings.max_steps,
    )
    return preview.model_dump(mode="json")


@router.get("/recurrence/default")
async def get_default_rule(settings: Settings = Depends(get_settings)) -> dict:
    """Initial picker state seeded from today's date."""
    today = current_date(settings.timezone)
    preview_config = settings.load_app_config().preview
    rule = default_rule(
        today,
        frequency=preview_config.default_frequency,
        interval=preview_config.default_interval,
    )
    return {"status": "ok", "rule": rule.model_dump(mode="json")}


@router.post("/recurrence/preview")
async def preview_recurrence(
    payload: dict,
    settings: Settings = Depends(get_settings),
) -> dict:
    """Expand a rule and return its summary, occurrence dates and one calendar month."""
    today = current_date(settings.timezone)
    try:
        rule = _build_rule(payload.get("rule"), today=today)
        preview = _preview_payload(rule, payload.get("view"), settings, today)
    except (TypeError, ValueError) as e:
        logger.warning(f"Rejected recurrence preview payload: {e}")
        return {"status": "error", "error": str(e)}
    return {"status": "ok", **preview}


def _edit_actions(today: date, value: Any) -> Dict[str, Callable[[RecurrenceRule], RecurrenceRule]]:
    def parse_optional_date(raw: Any) -> date | None:
        return parse_rule_date(raw, today) if raw else None

    return {
        "set_start_date": lambda rule: with_start_date(rule, parse_rule_date(value, today)),
        "toggle_weekday": lambda rule: toggle_weekday(rule, value),
        "set_monthly_mode": lambda rule: switch_monthly_mode(rule, value),
        "set_frequency": lambda rule: with_frequency(rule, value),
        "set_interval": lambda rule: with_interval(rule, value),
        "set_end_date": lambda rule: with_end_date(rule, parse_optional_date(value)),
        "toggle_end_date": lambda rule: toggle_end_date(rule, today),
        "set_week_order": lambda rule: with_week_order(rule, value),
        "set_day_of_week": lambda rule: with_day_of_week(rule, value),
    }


@router.post("/recurrence/edit")
async def edit_recurrence(
    payload: dict,
    settings: Settings = Depends(get_settings),
) -> dict:
    """Apply one picker edit to a rule and return the updated preview."""
    today = current_date(settings.timezone)
    action = payload.get("action")
    try:
        actions = _edit_actions(today, payload.get("value"))
        if action not in actions:
            raise ValueError(f"Unknown edit action: {action}")
        rule = actions[action](_build_rule(payload.get("rule"), today=today))
        preview = _preview_payload(rule, payload.get("view"), settings, today)
    except (TypeError, ValueError) as e:
        logger.warning(f"Rejected recurrence edit '{action}': {e}")
        return {"status": "error", "error": str(e)}
    return {"status": "ok", "action": action, **preview}
