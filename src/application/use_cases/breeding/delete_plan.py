from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import NotFoundError, PreconditionError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import load_plan

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, plan_id: UUID) -> None:
    plan = await load_plan(uow, plan_id)
    if plan.ewes:
        raise PreconditionError(
            "Breeding plan still has ewes; remove them before deleting",
            details={"ewes": len(plan.ewes)},
        )
    deleted = await uow.breeding_plans.delete(plan_id)
    if not deleted:
        raise NotFoundError(f"Breeding plan {plan_id} not found")
    await uow.commit()
    logger.info("Breeding plan %s deleted", plan_id)
