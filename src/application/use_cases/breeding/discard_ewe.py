from __future__ import annotations

import logging
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import load_plan, load_sheep, require_entry
from src.domain.models.sheep import Sheep
from src.domain.value_objects.sheep_status import SheepStatus

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, plan_id: UUID, ewe_id: UUID) -> Sheep:
    """Cull the ewe. Her plan entry stays as breeding history."""
    plan = await load_plan(uow, plan_id)
    require_entry(plan, ewe_id)
    await load_sheep(uow, ewe_id)
    updated = await uow.sheep.update(ewe_id, {"status": SheepStatus.CULLED.value})
    await uow.commit()
    logger.info("Ewe %s from breeding plan %s marked for culling", ewe_id, plan_id)
    return updated
