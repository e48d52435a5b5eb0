from __future__ import annotations

import logging
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import (
    ensure_breedable,
    ensure_not_enrolled,
    load_plan,
    load_sheep,
    save_plan,
)
from src.domain.models.breeding_plan import BreedingPlan

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, plan_id: UUID, ewe_id: UUID) -> BreedingPlan:
    plan = await load_plan(uow, plan_id)
    ensure_breedable(await load_sheep(uow, ewe_id))
    await ensure_not_enrolled(uow, [ewe_id])
    plan.add_ewe(ewe_id)
    updated = await save_plan(uow, plan)
    await uow.commit()
    logger.info("Ewe %s added to breeding plan %s", ewe_id, plan_id)
    return updated
