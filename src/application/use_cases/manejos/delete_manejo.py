from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import NotFoundError
from src.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, manejo_id: UUID) -> None:
    deleted = await uow.manejos.delete(manejo_id)
    if not deleted:
        raise NotFoundError(f"Manejo {manejo_id} not found")
    await uow.commit()
    logger.info("Manejo %s deleted", manejo_id)
