from __future__ import annotations

import logging
from datetime import date
from uuid import UUID

from src.application.errors import InvalidStateError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import (
    load_plan,
    load_sheep,
    require_entry,
    save_plan,
)
from src.domain.models.breeding_plan import BreedingPlan
from src.domain.value_objects.sex import Sex

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    plan_id: UUID,
    ewe_id: UUID,
    sire_id: UUID,
    mating_date: date | None = None,
    *,
    today: date | None = None,
) -> BreedingPlan:
    plan = await load_plan(uow, plan_id)
    entry = require_entry(plan, ewe_id)
    if not entry.heat_detected:
        raise InvalidStateError("Heat must be confirmed before assigning a ram")
    if entry.finalized:
        raise InvalidStateError("Breeding cycle already finalized for this ewe")
    ram = await load_sheep(uow, sire_id)
    if ram.sex != Sex.MALE.value:
        raise ValidationError(f"Sheep {sire_id} is not a ram")
    entry.assign_ram(sire_id, mating_date or today or date.today())
    updated = await save_plan(uow, plan)
    await uow.commit()
    logger.info("Ram %s assigned to ewe %s in plan %s", sire_id, ewe_id, plan_id)
    return updated
