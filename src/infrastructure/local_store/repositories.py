from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import ConflictError
from src.application.interfaces.repositories.breeding_plans import BreedingPlansRepository
from src.application.interfaces.repositories.manejos import ManejosRepository
from src.application.interfaces.repositories.sheep import SheepRepository
from src.domain.models.breeding_plan import BreedingPlan
from src.domain.models.manejo import Manejo
from src.domain.models.sheep import Sheep
from src.infrastructure.local_store.document_store import LocalDocumentStore
from src.infrastructure.local_store.mappers import (
    manejo_from_doc,
    manejo_to_doc,
    plan_from_doc,
    plan_to_doc,
    sheep_from_doc,
    sheep_to_doc,
)


class SheepLocalRepository(SheepRepository):
    collection = "sheep"

    def __init__(self, store: LocalDocumentStore) -> None:
        self.store = store

    async def add(self, sheep: Sheep) -> Sheep:
        if any(doc["tag"] == sheep.tag for doc in await self.store.documents(self.collection)):
            raise ConflictError("Sheep tag already exists")
        await self.store.put(self.collection, str(sheep.id), sheep_to_doc(sheep))
        return sheep

    async def get(self, sheep_id: UUID) -> Sheep | None:
        doc = await self.store.document(self.collection, str(sheep_id))
        return sheep_from_doc(doc) if doc else None

    async def list(
        self,
        *,
        sex: str | None = None,
        status: str | None = None,
        group_id: UUID | None = None,
        ids: list[UUID] | None = None,
    ) -> list[Sheep]:
        items = [sheep_from_doc(doc) for doc in await self.store.documents(self.collection)]
        if sex is not None:
            items = [s for s in items if s.sex == sex]
        if status is not None:
            items = [s for s in items if s.status == status]
        if group_id is not None:
            items = [s for s in items if s.group_id == group_id]
        if ids is not None:
            wanted = set(ids)
            items = [s for s in items if s.id in wanted]
        return sorted(items, key=lambda s: s.tag)

    async def update(
        self,
        sheep_id: UUID,
        data: dict,
        expected_version: int | None = None,
    ) -> Sheep | None:
        current = await self.get(sheep_id)
        if current is None:
            return None
        updated = replace(
            current,
            **data,
            version=current.version + 1,
            updated_at=datetime.now(timezone.utc),
        )
        stored = await self.store.put_if_version(
            self.collection, str(sheep_id), sheep_to_doc(updated), expected_version
        )
        return updated if stored else None


class BreedingPlansLocalRepository(BreedingPlansRepository):
    collection = "breeding_plans"

    def __init__(self, store: LocalDocumentStore) -> None:
        self.store = store

    async def add(self, plan: BreedingPlan) -> BreedingPlan:
        await self.store.put(self.collection, str(plan.id), plan_to_doc(plan))
        return plan

    async def get(self, plan_id: UUID) -> BreedingPlan | None:
        doc = await self.store.document(self.collection, str(plan_id))
        return plan_from_doc(doc) if doc else None

    async def list(self) -> list[BreedingPlan]:
        plans = [plan_from_doc(doc) for doc in await self.store.documents(self.collection)]
        return sorted(plans, key=lambda p: p.created_at, reverse=True)

    async def update(self, plan: BreedingPlan, expected_version: int) -> BreedingPlan | None:
        stored = await self.store.put_if_version(
            self.collection, str(plan.id), plan_to_doc(plan), expected_version
        )
        return plan if stored else None

    async def delete(self, plan_id: UUID) -> bool:
        return await self.store.remove(self.collection, str(plan_id))


class ManejosLocalRepository(ManejosRepository):
    collection = "manejos"

    def __init__(self, store: LocalDocumentStore) -> None:
        self.store = store

    async def add(self, manejo: Manejo) -> Manejo:
        await self.store.put(self.collection, str(manejo.id), manejo_to_doc(manejo))
        return manejo

    async def get(self, manejo_id: UUID) -> Manejo | None:
        doc = await self.store.document(self.collection, str(manejo_id))
        return manejo_from_doc(doc) if doc else None

    async def list(self, *, status: str | None = None) -> list[Manejo]:
        items = [manejo_from_doc(doc) for doc in await self.store.documents(self.collection)]
        if status is not None:
            items = [m for m in items if m.status == status]
        return sorted(items, key=lambda m: (m.planned_date, m.planned_time))

    async def update(self, manejo: Manejo, expected_version: int) -> Manejo | None:
        stored = await self.store.put_if_version(
            self.collection, str(manejo.id), manejo_to_doc(manejo), expected_version
        )
        return manejo if stored else None

    async def delete(self, manejo_id: UUID) -> bool:
        return await self.store.remove(self.collection, str(manejo_id))
