from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.manejos.common import load_manejo
from src.domain.models.manejo import Manejo


async def execute(uow: UnitOfWork, manejo_id: UUID) -> Manejo:
    return await load_manejo(uow, manejo_id)
