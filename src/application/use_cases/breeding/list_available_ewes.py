from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.sheep import Sheep
from src.domain.services.eligibility import available_ewes
from src.domain.value_objects.sex import Sex
from src.domain.value_objects.sheep_status import SheepStatus


async def execute(uow: UnitOfWork, group_id: UUID | None = None) -> list[Sheep]:
    sheep = await uow.sheep.list(sex=Sex.FEMALE.value, status=SheepStatus.ACTIVE.value)
    plans = await uow.breeding_plans.list()
    return available_ewes(sheep, plans, group_id=group_id)
