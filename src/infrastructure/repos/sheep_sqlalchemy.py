from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.sheep import SheepRepository
from src.domain.models.sheep import Sheep
from src.infrastructure.db.errors import storage_errors
from src.infrastructure.db.orm.sheep import SheepORM


class SheepSQLAlchemyRepository(SheepRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: SheepORM) -> Sheep:
        return Sheep(
            id=orm.id,
            tag=orm.tag,
            sex=orm.sex,
            status=orm.status,
            name=orm.name,
            birth_date=orm.birth_date,
            pregnant=orm.pregnant,
            sire_id=orm.sire_id,
            dam_id=orm.dam_id,
            group_id=orm.group_id,
            paddock_id=orm.paddock_id,
            weight=orm.weight,
            notes=orm.notes,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, sheep: Sheep) -> Sheep:
        orm = SheepORM(
            id=sheep.id,
            tag=sheep.tag,
            sex=sheep.sex,
            status=sheep.status,
            name=sheep.name,
            birth_date=sheep.birth_date,
            pregnant=sheep.pregnant,
            sire_id=sheep.sire_id,
            dam_id=sheep.dam_id,
            group_id=sheep.group_id,
            paddock_id=sheep.paddock_id,
            weight=sheep.weight,
            notes=sheep.notes,
            created_at=sheep.created_at,
            updated_at=sheep.updated_at,
            version=sheep.version,
        )
        self.session.add(orm)
        try:
            with storage_errors("create sheep"):
                await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Sheep tag already exists") from exc
        return self._to_domain(orm)

    async def get(self, sheep_id: UUID) -> Sheep | None:
        stmt = (
            select(SheepORM)
            .where(SheepORM.id == sheep_id)
            .execution_options(populate_existing=True)
        )
        with storage_errors("load sheep"):
            result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        *,
        sex: str | None = None,
        status: str | None = None,
        group_id: UUID | None = None,
        ids: list[UUID] | None = None,
    ) -> list[Sheep]:
        stmt = select(SheepORM)
        if sex is not None:
            stmt = stmt.where(SheepORM.sex == sex)
        if status is not None:
            stmt = stmt.where(SheepORM.status == status)
        if group_id is not None:
            stmt = stmt.where(SheepORM.group_id == group_id)
        if ids is not None:
            if not ids:
                return []
            stmt = stmt.where(SheepORM.id.in_(ids))
        stmt = stmt.order_by(SheepORM.tag).execution_options(populate_existing=True)
        with storage_errors("list sheep"):
            result = await self.session.execute(stmt)
        return [self._to_domain(item) for item in result.scalars().all()]

    async def update(
        self,
        sheep_id: UUID,
        data: dict,
        expected_version: int | None = None,
    ) -> Sheep | None:
        values = {
            **data,
            "version": SheepORM.version + 1,
            "updated_at": datetime.now(timezone.utc),
        }
        stmt = update(SheepORM).where(SheepORM.id == sheep_id)
        if expected_version is not None:
            stmt = stmt.where(SheepORM.version == expected_version)
        stmt = stmt.values(**values).execution_options(synchronize_session=False)
        try:
            with storage_errors("update sheep"):
                result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update sheep due to constraint violation") from exc
        if result.rowcount == 0:
            return None
        return await self.get(sheep_id)
