from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import load_plan
from src.domain.models.breeding_plan import BreedingPlan


async def execute(uow: UnitOfWork, plan_id: UUID) -> BreedingPlan:
    return await load_plan(uow, plan_id)
