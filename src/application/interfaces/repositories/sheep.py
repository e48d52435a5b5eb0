from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.sheep import Sheep


class SheepRepository(Protocol):
    async def add(self, sheep: Sheep) -> Sheep: ...

    async def get(self, sheep_id: UUID) -> Sheep | None: ...

    async def list(
        self,
        *,
        sex: str | None = None,
        status: str | None = None,
        group_id: UUID | None = None,
        ids: list[UUID] | None = None,
    ) -> list[Sheep]: ...

    async def update(
        self,
        sheep_id: UUID,
        data: dict,
        expected_version: int | None = None,
    ) -> Sheep | None: ...
