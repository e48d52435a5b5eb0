from __future__ import annotations

from datetime import date
from uuid import UUID

from src.application.errors import InvalidStateError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import load_plan, require_entry, save_plan
from src.domain.models.breeding_plan import BreedingPlan


async def execute(
    uow: UnitOfWork,
    plan_id: UUID,
    ewe_id: UUID,
    detected: bool,
    heat_date: date | None = None,
    *,
    today: date | None = None,
) -> BreedingPlan:
    plan = await load_plan(uow, plan_id)
    entry = require_entry(plan, ewe_id)
    if entry.finalized:
        raise InvalidStateError("Breeding cycle already finalized for this ewe")
    entry.set_heat(detected, heat_date or today or date.today())
    updated = await save_plan(uow, plan)
    await uow.commit()
    return updated
