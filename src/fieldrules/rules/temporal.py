"""Date and time rules: date, before, after, time."""

import re
from datetime import date, datetime, time, timezone
from typing import Any

from fieldrules.rules.registry import (
    RuleCategory,
    RuleDefinition,
    RuleRegistry,
    require_args,
)
from fieldrules.types import InvalidArgumentError

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


def as_datetime(value: Any) -> datetime | None:
    """Read a date-like value as a naive UTC datetime, or None."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _reference(rule: str, arg: str | None) -> datetime:
    require_args(rule, (arg,))
    keyword = arg.strip().lower()
    if keyword == "now":
        return utc_now()
    if keyword == "today":
        # UTC midnight, same clock as "now"
        return utc_now().replace(hour=0, minute=0, second=0, microsecond=0)
    moment = as_datetime(arg)
    if moment is None:
        raise InvalidArgumentError(
            rule, f"The {rule} rule argument must be an ISO date, 'now' or 'today', got '{arg}'"
        )
    return moment


def date_(value: Any, *args: str) -> bool:
    return as_datetime(value) is not None


def before(value: Any, *args: str) -> bool:
    reference = _reference("before", args[0] if args else None)
    moment = as_datetime(value)
    return moment is not None and moment < reference


def after(value: Any, *args: str) -> bool:
    reference = _reference("after", args[0] if args else None)
    moment = as_datetime(value)
    return moment is not None and moment > reference


def time_(value: Any, *args: str) -> bool:
    if isinstance(value, time):
        return True
    return isinstance(value, str) and bool(TIME_PATTERN.match(value.strip()))


def register_temporal_rules() -> None:
    for name, implementation, min_args, description, examples in [
        ("date", date_, 0, "Value is a date or ISO-8601 date string", ["required|date"]),
        ("before", before, 1, "Date is strictly before the given date", ["date|before:2030-01-01"]),
        ("after", after, 1, "Date is strictly after the given date", ["date|after:today"]),
        ("time", time_, 0, "Value is a 24-hour HH:MM[:SS] time", ["time"]),
    ]:
        RuleRegistry.register(
            RuleDefinition(
                name=name,
                description=description,
                category=RuleCategory.DATE,
                implementation=implementation,
                min_args=min_args,
                examples=examples,
            )
        )
