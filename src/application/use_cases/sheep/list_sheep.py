from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.sheep.create_sheep import validate_codes
from src.domain.models.sheep import Sheep


async def execute(
    uow: UnitOfWork,
    *,
    sex: str | None = None,
    status: str | None = None,
    group_id: UUID | None = None,
) -> list[Sheep]:
    validate_codes(sex, status)
    items = await uow.sheep.list(sex=sex, status=status, group_id=group_id)
    return sorted(items, key=lambda s: s.tag)
