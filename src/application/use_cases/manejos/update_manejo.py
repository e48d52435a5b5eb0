from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.manejos.common import (
    ensure_valid_kind,
    ensure_valid_rule,
    ensure_valid_time,
    load_manejo,
    save_manejo,
)
from src.application.use_cases.manejos.create_manejo import ensure_date_matches_rule
from src.domain.models.manejo import Manejo
from src.domain.value_objects.recurrence import RecurrenceRule, with_series


@dataclass(slots=True)
class UpdateManejoInput:
    title: str | None = None
    planned_date: date | None = None
    planned_time: str | None = None
    kind: str | None = None
    rule: RecurrenceRule | None = None
    procedure: str | None = None
    notes: str | None = None
    group_id: UUID | None = None
    sheep_ids: list[UUID] | None = None
    # Explicitly drop any group/animal selection (whole flock)
    clear_targets: bool = field(default=False)


async def execute(uow: UnitOfWork, manejo_id: UUID, payload: UpdateManejoInput) -> Manejo:
    manejo = await load_manejo(uow, manejo_id)
    if payload.title is not None:
        if not payload.title.strip():
            raise ValidationError("Title is required")
        manejo.title = payload.title.strip().upper()
    if payload.kind is not None:
        ensure_valid_kind(payload.kind)
        manejo.kind = payload.kind
    if payload.planned_time is not None:
        ensure_valid_time(payload.planned_time)
        manejo.planned_time = payload.planned_time
    if payload.rule is not None:
        ensure_valid_rule(payload.rule)
        # Keep the series anchor and counter of the existing task
        manejo.rule = with_series(
            payload.rule,
            reference_start_date=manejo.rule.reference_start_date or manejo.planned_date,
            occurrence_count=manejo.rule.occurrence_count,
        )
    if payload.planned_date is not None:
        manejo.planned_date = payload.planned_date
    if payload.planned_date is not None or payload.rule is not None:
        ensure_date_matches_rule(manejo.rule, manejo.planned_date)
    if payload.procedure is not None:
        manejo.procedure = payload.procedure
    if payload.notes is not None:
        manejo.notes = payload.notes.upper()
    if payload.clear_targets:
        manejo.group_id = None
        manejo.sheep_ids = []
    elif payload.group_id is not None:
        manejo.group_id = payload.group_id
        manejo.sheep_ids = []
    elif payload.sheep_ids is not None:
        manejo.group_id = None
        manejo.sheep_ids = list(payload.sheep_ids)

    manejo.edited_by_manager = True
    manejo.last_edited_at = datetime.now(timezone.utc)
    updated = await save_manejo(uow, manejo)
    await uow.commit()
    return updated
