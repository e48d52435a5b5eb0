from __future__ import annotations

from datetime import date

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.services.breeding_calendar import BreedingAlert, breeding_alerts


async def execute(uow: UnitOfWork, today: date) -> list[BreedingAlert]:
    plans = await uow.breeding_plans.list()
    return breeding_alerts(plans, today)
