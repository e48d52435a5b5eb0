from __future__ import annotations

import logging

from src.application.interfaces.unit_of_work import UnitOfWork
from src.infrastructure.local_store.document_store import LocalDocumentStore
from src.infrastructure.local_store.repositories import (
    BreedingPlansLocalRepository,
    ManejosLocalRepository,
    SheepLocalRepository,
)

logger = logging.getLogger(__name__)


class LocalUnitOfWork(UnitOfWork):
    """Unit of work over the JSON store; every repository write is already durable."""

    atomic = False

    def __init__(self, store: LocalDocumentStore) -> None:
        self.store = store
        self.sheep = SheepLocalRepository(store)
        self.breeding_plans = BreedingPlansLocalRepository(store)
        self.manejos = ManejosLocalRepository(store)

    async def __aenter__(self) -> UnitOfWork:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc:
            logger.warning("Local store writes made before %s are kept", exc_type.__name__)

    async def commit(self) -> None:
        return None

    async def rollback(self) -> None:
        logger.warning("Rollback requested on the local store; nothing to undo")
