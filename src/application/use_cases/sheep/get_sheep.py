from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFoundError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.sheep import Sheep


async def execute(uow: UnitOfWork, sheep_id: UUID) -> Sheep:
    sheep = await uow.sheep.get(sheep_id)
    if not sheep:
        raise NotFoundError("Sheep not found")
    return sheep
