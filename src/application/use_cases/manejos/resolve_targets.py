from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.manejos.common import load_manejo
from src.domain.models.sheep import Sheep
from src.domain.value_objects.sheep_status import SheepStatus


async def execute(uow: UnitOfWork, manejo_id: UUID) -> list[Sheep]:
    """Animals a task applies to: its group, its explicit list or the whole active flock."""
    manejo = await load_manejo(uow, manejo_id)
    active = SheepStatus.ACTIVE.value
    if manejo.group_id is not None:
        targets = await uow.sheep.list(group_id=manejo.group_id, status=active)
    elif manejo.sheep_ids:
        # Explicitly chosen animals are returned whatever their status
        targets = await uow.sheep.list(ids=list(manejo.sheep_ids))
    else:
        targets = await uow.sheep.list(status=active)
    return sorted(targets, key=lambda s: s.tag)
