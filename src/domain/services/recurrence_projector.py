"""Recurrence arithmetic for scheduled husbandry tasks.

Everything here works on local calendar dates (`datetime.date`), never on
instants, so no timezone conversion can move an occurrence to another day.
Projections are derived on demand and never stored.
"""
from __future__ import annotations

import heapq
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from dateutil.relativedelta import relativedelta

from src.domain.models.manejo import Manejo
from src.domain.value_objects.recurrence import (
    DailyRecurrence,
    MonthlyRecurrence,
    NoRecurrence,
    RecurrenceRule,
    WeeklyRecurrence,
    YearlyRecurrence,
)
from src.utils.local_dates import add_days, js_weekday

# Safety bound on the steps taken per task and per query
MAX_OCCURRENCES = 366

WEEKLY_SCAN_DAYS = 7
MONTHLY_SCAN_MONTHS = 12
YEARLY_SCAN_MONTHS = 24

REASON_WEEKDAY = "weekday_not_selected"
REASON_DAY_OF_MONTH = "day_of_month_mismatch"
REASON_MONTH = "month_not_selected"


@dataclass(slots=True, frozen=True)
class DateValidation:
    valid: bool
    reason: str | None = None


@dataclass(slots=True, frozen=True)
class ProjectedOccurrence:
    manejo: Manejo
    date: date

    @property
    def planned_time(self) -> str:
        return self.manejo.planned_time

    @property
    def sort_key(self) -> tuple[date, str]:
        return (self.date, self.manejo.planned_time)


@dataclass(slots=True, frozen=True)
class CompletionAdvance:
    next_date: date
    occurrence_count: int


def next_occurrence(rule: RecurrenceRule, current: date) -> date | None:
    """Return the first occurrence strictly after `current`, or None."""
    if isinstance(rule, NoRecurrence):
        return None
    if isinstance(rule, DailyRecurrence):
        return add_days(current, max(rule.interval_days, 1))
    if isinstance(rule, WeeklyRecurrence):
        if not rule.weekdays:
            return add_days(current, WEEKLY_SCAN_DAYS)
        for offset in range(1, WEEKLY_SCAN_DAYS + 1):
            candidate = add_days(current, offset)
            if js_weekday(candidate) in rule.weekdays:
                return candidate
        return None
    if isinstance(rule, MonthlyRecurrence):
        target = rule.day_of_month or current.day
        # relativedelta clamps the day to the month's last day
        for offset in range(1, MONTHLY_SCAN_MONTHS + 1):
            candidate = current + relativedelta(months=offset, day=target)
            if candidate > current:
                return candidate
        return None
    if isinstance(rule, YearlyRecurrence):
        if not rule.months:
            return current + relativedelta(years=1)
        # Occurrences fall on the 1st of each selected month
        for offset in range(1, YEARLY_SCAN_MONTHS + 1):
            candidate = current + relativedelta(months=offset, day=1)
            if candidate.month - 1 in rule.months and candidate > current:
                return candidate
        return None
    raise TypeError(f"Unsupported recurrence rule: {rule!r}")


def validate_date(rule: RecurrenceRule, candidate: date) -> DateValidation:
    """Check that a manually chosen date agrees with the rule."""
    if isinstance(rule, WeeklyRecurrence) and rule.weekdays:
        if js_weekday(candidate) not in rule.weekdays:
            return DateValidation(False, REASON_WEEKDAY)
    elif isinstance(rule, MonthlyRecurrence) and rule.day_of_month:
        if candidate != candidate + relativedelta(day=rule.day_of_month):
            return DateValidation(False, REASON_DAY_OF_MONTH)
    elif isinstance(rule, YearlyRecurrence) and rule.months:
        if candidate.month - 1 not in rule.months:
            return DateValidation(False, REASON_MONTH)
    return DateValidation(True)


def auto_adjust(rule: RecurrenceRule, candidate: date) -> date | None:
    return next_occurrence(rule, candidate)


def series_limit(rule: RecurrenceRule, planned_date: date) -> date | None:
    """Last date (inclusive) a series may produce, or None when uncapped."""
    if not rule.duration_days or rule.duration_days <= 0:
        return None
    start = rule.reference_start_date or planned_date
    return add_days(start, rule.duration_days)


def _skip_ahead(rule: RecurrenceRule, start: date, window_start: date) -> date:
    """Jump a fixed-period series to its last step before `window_start`.

    Daily and weekly series repeat on a fixed period, so the steps before the
    window can be skipped arithmetically instead of walked one by one.
    """
    if isinstance(rule, DailyRecurrence):
        period = max(rule.interval_days, 1)
    elif isinstance(rule, WeeklyRecurrence):
        period = WEEKLY_SCAN_DAYS
    else:
        return start
    gap = (window_start - start).days
    if gap <= 1:
        return start
    return add_days(start, (gap - 1) // period * period)


def project_manejo(
    manejo: Manejo,
    window_start: date,
    window_end: date | None = None,
) -> Iterator[ProjectedOccurrence]:
    """Yield the task's occurrences inside [window_start, window_end].

    Only pending tasks recur; finished or cancelled ones are history and yield
    at most their own planned date.
    """
    rule = manejo.rule
    limit = series_limit(rule, manejo.planned_date)
    recurring = manejo.is_pending and not isinstance(rule, NoRecurrence)
    current: date | None = manejo.planned_date
    if recurring:
        current = _skip_ahead(rule, current, window_start)
    steps = 0
    while current is not None and steps < MAX_OCCURRENCES:
        steps += 1
        if limit is not None and current > limit:
            return
        if window_end is not None and current > window_end:
            return
        if current >= window_start:
            yield ProjectedOccurrence(manejo=manejo, date=current)
        if not recurring:
            return
        following = next_occurrence(rule, current)
        if following is None or following <= current:
            return
        current = following


class Projection:
    """Lazy, restartable calendar projection of many tasks.

    Each iteration recomputes the occurrences from the task definitions and
    yields them ordered by (date, planned_time).
    """

    def __init__(
        self,
        manejos: Iterable[Manejo],
        window_start: date,
        window_end: date | None = None,
    ) -> None:
        if window_end is not None and window_end < window_start:
            raise ValueError("window_end must not be before window_start")
        self._manejos = list(manejos)
        self.window_start = window_start
        self.window_end = window_end

    def __iter__(self) -> Iterator[ProjectedOccurrence]:
        streams = [project_manejo(m, self.window_start, self.window_end) for m in self._manejos]
        return heapq.merge(*streams, key=lambda occ: occ.sort_key)


def project(
    manejos: Iterable[Manejo],
    window_start: date,
    window_end: date | None = None,
) -> Projection:
    return Projection(manejos, window_start, window_end)


def advance_after_completion(manejo: Manejo) -> CompletionAdvance | None:
    """Next planned date of a series once the current instance is done.

    Returns None when the task does not recur or the series would run past
    its duration cap.
    """
    rule = manejo.rule
    following = next_occurrence(rule, manejo.planned_date)
    if following is None:
        return None
    limit = series_limit(rule, manejo.planned_date)
    if limit is not None and following > limit:
        return None
    return CompletionAdvance(next_date=following, occurrence_count=rule.occurrence_count + 1)
