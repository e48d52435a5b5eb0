from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.breeding_plan import BreedingPlan


class BreedingPlansRepository(Protocol):
    async def add(self, plan: BreedingPlan) -> BreedingPlan: ...

    async def get(self, plan_id: UUID) -> BreedingPlan | None: ...

    async def list(self) -> list[BreedingPlan]: ...

    # Returns None when the stored version no longer matches expected_version
    async def update(self, plan: BreedingPlan, expected_version: int) -> BreedingPlan | None: ...

    async def delete(self, plan_id: UUID) -> bool: ...
