from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, ClassVar, Union


class Recurrence(str, Enum):
    NONE = "NONE"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


@dataclass(slots=True, frozen=True)
class _SeriesFields:
    # Overall series length, counted from reference_start_date
    duration_days: int | None = None
    reference_start_date: date | None = None
    occurrence_count: int = 0


@dataclass(slots=True, frozen=True)
class NoRecurrence(_SeriesFields):
    kind: ClassVar[Recurrence] = Recurrence.NONE


@dataclass(slots=True, frozen=True)
class DailyRecurrence(_SeriesFields):
    kind: ClassVar[Recurrence] = Recurrence.DAILY
    interval_days: int = 1


@dataclass(slots=True, frozen=True)
class WeeklyRecurrence(_SeriesFields):
    """Weekdays use 0 = Sunday ... 6 = Saturday."""

    kind: ClassVar[Recurrence] = Recurrence.WEEKLY
    weekdays: frozenset[int] = field(default_factory=frozenset)


@dataclass(slots=True, frozen=True)
class MonthlyRecurrence(_SeriesFields):
    kind: ClassVar[Recurrence] = Recurrence.MONTHLY
    # None means "same day of month as the planned date"
    day_of_month: int | None = None


@dataclass(slots=True, frozen=True)
class YearlyRecurrence(_SeriesFields):
    """Months use 0 = January ... 11 = December."""

    kind: ClassVar[Recurrence] = Recurrence.YEARLY
    months: frozenset[int] = field(default_factory=frozenset)


RecurrenceRule = Union[
    NoRecurrence, DailyRecurrence, WeeklyRecurrence, MonthlyRecurrence, YearlyRecurrence
]

_RULE_TYPES: dict[Recurrence, type] = {
    Recurrence.NONE: NoRecurrence,
    Recurrence.DAILY: DailyRecurrence,
    Recurrence.WEEKLY: WeeklyRecurrence,
    Recurrence.MONTHLY: MonthlyRecurrence,
    Recurrence.YEARLY: YearlyRecurrence,
}


def validate_rule(rule: RecurrenceRule) -> None:
    """Raise ValueError when the rule carries out-of-range values."""
    if rule.duration_days is not None and rule.duration_days < 0:
        raise ValueError("duration_days must be >= 0")
    if rule.occurrence_count < 0:
        raise ValueError("occurrence_count must be >= 0")
    if isinstance(rule, DailyRecurrence) and rule.interval_days < 1:
        raise ValueError("interval_days must be >= 1")
    if isinstance(rule, WeeklyRecurrence) and any(d < 0 or d > 6 for d in rule.weekdays):
        raise ValueError("weekdays must be within 0..6")
    if isinstance(rule, MonthlyRecurrence) and rule.day_of_month is not None:
        if not 1 <= rule.day_of_month <= 31:
            raise ValueError("day_of_month must be within 1..31")
    if isinstance(rule, YearlyRecurrence) and any(m < 0 or m > 11 for m in rule.months):
        raise ValueError("months must be within 0..11")


def with_series(rule: RecurrenceRule, **changes: Any) -> RecurrenceRule:
    """Return a copy of `rule` with updated series fields."""
    data = rule_to_dict(rule)
    data.update({k: v.isoformat() if isinstance(v, date) else v for k, v in changes.items()})
    return rule_from_dict(data)


def rule_to_dict(rule: RecurrenceRule) -> dict[str, Any]:
    data: dict[str, Any] = {
        "recurrence": rule.kind.value,
        "duration_days": rule.duration_days,
        "reference_start_date": (
            rule.reference_start_date.isoformat() if rule.reference_start_date else None
        ),
        "occurrence_count": rule.occurrence_count,
    }
    if isinstance(rule, DailyRecurrence):
        data["interval_days"] = rule.interval_days
    elif isinstance(rule, WeeklyRecurrence):
        data["weekdays"] = sorted(rule.weekdays)
    elif isinstance(rule, MonthlyRecurrence):
        data["day_of_month"] = rule.day_of_month
    elif isinstance(rule, YearlyRecurrence):
        data["months"] = sorted(rule.months)
    return data


def rule_from_dict(data: dict[str, Any] | None) -> RecurrenceRule:
    data = data or {}
    kind = Recurrence(data.get("recurrence") or Recurrence.NONE.value)
    ref = data.get("reference_start_date")
    common: dict[str, Any] = {
        "duration_days": data.get("duration_days"),
        "reference_start_date": date.fromisoformat(ref) if ref else None,
        "occurrence_count": int(data.get("occurrence_count") or 0),
    }
    if kind is Recurrence.DAILY:
        common["interval_days"] = int(data.get("interval_days") or 1)
    elif kind is Recurrence.WEEKLY:
        common["weekdays"] = frozenset(int(d) for d in data.get("weekdays") or [])
    elif kind is Recurrence.MONTHLY:
        day = data.get("day_of_month")
        common["day_of_month"] = int(day) if day else None
    elif kind is Recurrence.YEARLY:
        common["months"] = frozenset(int(m) for m in data.get("months") or [])
    return _RULE_TYPES[kind](**common)
