from __future__ import annotations

import logging
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import (
    load_plan,
    load_sheep,
    require_entry,
    save_plan,
    update_sheep_fields,
)
from src.domain.models.breeding_plan import BreedingPlan

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, plan_id: UUID, ewe_id: UUID) -> BreedingPlan:
    plan = await load_plan(uow, plan_id)
    require_entry(plan, ewe_id)
    await load_sheep(uow, ewe_id)
    # The ewe goes back to the open pool. The sheep is written first so a
    # failed plan write can simply be retried.
    await update_sheep_fields(uow, ewe_id, {"pregnant": False, "sire_id": None})
    plan.remove_ewe(ewe_id)
    updated = await save_plan(uow, plan)
    await uow.commit()
    logger.info("Ewe %s removed from breeding plan %s", ewe_id, plan_id)
    return updated
