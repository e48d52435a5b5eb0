from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.breeding_plans import BreedingPlansRepository
from src.application.interfaces.repositories.manejos import ManejosRepository
from src.application.interfaces.repositories.sheep import SheepRepository


class UnitOfWork(Protocol):
    sheep: SheepRepository
    breeding_plans: BreedingPlansRepository
    manejos: ManejosRepository
    # False when each repository write is persisted on its own (no rollback)
    atomic: bool

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
