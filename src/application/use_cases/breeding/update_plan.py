from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import load_plan, save_plan
from src.domain.models.breeding_plan import (
    BreedingPlan,
    BreedingPlanStatus,
    normalize_plan_name,
)


@dataclass(slots=True)
class UpdatePlanInput:
    name: str | None = None
    start_date: date | None = None
    sync_date: date | None = None
    sire_id: UUID | None = None
    status: str | None = None


async def execute(uow: UnitOfWork, plan_id: UUID, payload: UpdatePlanInput) -> BreedingPlan:
    plan = await load_plan(uow, plan_id)
    if payload.name is not None:
        if not payload.name.strip():
            raise ValidationError("Plan name is required")
        plan.name = normalize_plan_name(payload.name)
    if payload.status is not None:
        valid = {s.value for s in BreedingPlanStatus}
        if payload.status not in valid:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(sorted(valid))}")
        plan.status = payload.status
    if payload.start_date is not None:
        plan.start_date = payload.start_date
    if payload.sync_date is not None:
        plan.sync_date = payload.sync_date
    if payload.sire_id is not None:
        plan.sire_id = payload.sire_id
    updated = await save_plan(uow, plan)
    await uow.commit()
    return updated
