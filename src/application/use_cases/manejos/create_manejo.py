from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.manejos.common import (
    ensure_valid_kind,
    ensure_valid_rule,
    ensure_valid_time,
)
from src.domain.models.manejo import DEFAULT_PLANNED_TIME, Manejo, ManejoKind
from src.domain.services.recurrence_projector import auto_adjust, validate_date
from src.domain.value_objects.recurrence import NoRecurrence, RecurrenceRule, with_series

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateManejoInput:
    title: str
    planned_date: date
    planned_time: str | None = None
    kind: str = ManejoKind.RECURRING.value
    rule: RecurrenceRule = field(default_factory=NoRecurrence)
    collaborator: str | None = None
    procedure: str | None = None
    notes: str | None = None
    group_id: UUID | None = None
    sheep_ids: list[UUID] = field(default_factory=list)


def ensure_date_matches_rule(rule: RecurrenceRule, planned_date: date) -> None:
    check = validate_date(rule, planned_date)
    if not check.valid:
        suggested = auto_adjust(rule, planned_date)
        raise ValidationError(
            "Planned date does not match the recurrence rule",
            details={
                "reason": check.reason,
                "suggested_date": suggested.isoformat() if suggested else None,
            },
        )


async def execute(
    uow: UnitOfWork,
    payload: CreateManejoInput,
    *,
    default_time: str = DEFAULT_PLANNED_TIME,
) -> Manejo:
    if not payload.title or not payload.title.strip():
        raise ValidationError("Title is required")
    ensure_valid_kind(payload.kind)
    ensure_valid_rule(payload.rule)
    planned_time = payload.planned_time or default_time
    ensure_valid_time(planned_time)
    ensure_date_matches_rule(payload.rule, payload.planned_date)

    # The series is measured from the first planned date
    rule = with_series(
        payload.rule, reference_start_date=payload.planned_date, occurrence_count=0
    )
    manejo = Manejo.create(
        title=payload.title,
        planned_date=payload.planned_date,
        planned_time=planned_time,
        kind=payload.kind,
        rule=rule,
        collaborator=payload.collaborator,
        procedure=payload.procedure,
        notes=payload.notes,
        group_id=payload.group_id,
        sheep_ids=payload.sheep_ids,
    )
    created = await uow.manejos.add(manejo)
    await uow.commit()
    logger.info("Manejo %s scheduled for %s (%s)", created.id, created.planned_date, rule.kind.value)
    return created
