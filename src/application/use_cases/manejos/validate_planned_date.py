from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.application.use_cases.manejos.common import ensure_valid_rule
from src.domain.services.recurrence_projector import auto_adjust, validate_date
from src.domain.value_objects.recurrence import RecurrenceRule


@dataclass(slots=True)
class PlannedDateCheck:
    valid: bool
    reason: str | None = None
    # Next date that satisfies the rule, offered when the candidate does not
    suggested_date: date | None = None


def execute(rule: RecurrenceRule, candidate: date) -> PlannedDateCheck:
    ensure_valid_rule(rule)
    check = validate_date(rule, candidate)
    if check.valid:
        return PlannedDateCheck(valid=True)
    return PlannedDateCheck(
        valid=False, reason=check.reason, suggested_date=auto_adjust(rule, candidate)
    )
