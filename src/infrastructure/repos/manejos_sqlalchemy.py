from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.manejos import ManejosRepository
from src.domain.models.manejo import Manejo
from src.domain.value_objects.recurrence import rule_from_dict, rule_to_dict
from src.infrastructure.db.errors import storage_errors
from src.infrastructure.db.orm.manejo import ManejoORM


class ManejosSQLAlchemyRepository(ManejosRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ManejoORM) -> Manejo:
        return Manejo(
            id=orm.id,
            title=orm.title,
            planned_date=orm.planned_date,
            planned_time=orm.planned_time,
            kind=orm.kind,
            rule=rule_from_dict(orm.rule),
            status=orm.status,
            execution_date=orm.execution_date,
            collaborator=orm.collaborator,
            procedure=orm.procedure,
            notes=orm.notes,
            group_id=orm.group_id,
            sheep_ids=[UUID(str(x)) for x in orm.sheep_ids or []],
            edited_by_manager=orm.edited_by_manager,
            last_edited_at=orm.last_edited_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    def _columns(self, manejo: Manejo) -> dict:
        return {
            "title": manejo.title,
            "planned_date": manejo.planned_date,
            "planned_time": manejo.planned_time,
            "kind": manejo.kind,
            "rule": rule_to_dict(manejo.rule),
            "status": manejo.status,
            "execution_date": manejo.execution_date,
            "collaborator": manejo.collaborator,
            "procedure": manejo.procedure,
            "notes": manejo.notes,
            "group_id": manejo.group_id,
            "sheep_ids": [str(x) for x in manejo.sheep_ids],
            "edited_by_manager": manejo.edited_by_manager,
            "last_edited_at": manejo.last_edited_at,
            "updated_at": manejo.updated_at,
            "version": manejo.version,
        }

    async def add(self, manejo: Manejo) -> Manejo:
        orm = ManejoORM(id=manejo.id, created_at=manejo.created_at, **self._columns(manejo))
        self.session.add(orm)
        with storage_errors("create manejo"):
            await self.session.flush()
        return self._to_domain(orm)

    async def get(self, manejo_id: UUID) -> Manejo | None:
        stmt = (
            select(ManejoORM)
            .where(ManejoORM.id == manejo_id)
            .execution_options(populate_existing=True)
        )
        with storage_errors("load manejo"):
            result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(self, *, status: str | None = None) -> list[Manejo]:
        stmt = select(ManejoORM)
        if status is not None:
            stmt = stmt.where(ManejoORM.status == status)
        stmt = stmt.order_by(ManejoORM.planned_date, ManejoORM.planned_time)
        with storage_errors("list manejos"):
            result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return [self._to_domain(item) for item in result.scalars().all()]

    async def update(self, manejo: Manejo, expected_version: int) -> Manejo | None:
        stmt = (
            update(ManejoORM)
            .where(ManejoORM.id == manejo.id)
            .where(ManejoORM.version == expected_version)
            .values(**self._columns(manejo))
            .execution_options(synchronize_session=False)
        )
        with storage_errors("update manejo"):
            result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get(manejo.id)

    async def delete(self, manejo_id: UUID) -> bool:
        with storage_errors("delete manejo"):
            result = await self.session.execute(delete(ManejoORM).where(ManejoORM.id == manejo_id))
        return result.rowcount > 0
