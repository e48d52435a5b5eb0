from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.manejo import Manejo


class ManejosRepository(Protocol):
    async def add(self, manejo: Manejo) -> Manejo: ...

    async def get(self, manejo_id: UUID) -> Manejo | None: ...

    async def list(self, *, status: str | None = None) -> list[Manejo]: ...

    async def update(self, manejo: Manejo, expected_version: int) -> Manejo | None: ...

    async def delete(self, manejo_id: UUID) -> bool: ...
