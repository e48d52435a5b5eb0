from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_plan import BreedingPlan


async def execute(uow: UnitOfWork) -> list[BreedingPlan]:
    plans = await uow.breeding_plans.list()
    return sorted(plans, key=lambda p: p.created_at, reverse=True)
