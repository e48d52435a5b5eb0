from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.breeding_plans import BreedingPlansRepository
from src.domain.models.breeding_plan import BreedingPlan, BreedingPlanEwe
from src.infrastructure.db.errors import storage_errors
from src.infrastructure.db.orm.breeding_plan import BreedingPlanEweORM, BreedingPlanORM


class BreedingPlansSQLAlchemyRepository(BreedingPlansRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _ewe_to_domain(self, orm: BreedingPlanEweORM) -> BreedingPlanEwe:
        return BreedingPlanEwe(
            ewe_id=orm.ewe_id,
            heat_detected=orm.heat_detected,
            heat_date=orm.heat_date,
            sire_id=orm.sire_id,
            first_mating_date=orm.first_mating_date,
            attempt_number=orm.attempt_number,
            results={1: orm.result_1, 2: orm.result_2, 3: orm.result_3},
            finalized=orm.finalized,
        )

    def _ewe_to_orm(self, plan_id: UUID, position: int, entry: BreedingPlanEwe) -> BreedingPlanEweORM:
        return BreedingPlanEweORM(
            id=uuid4(),
            plan_id=plan_id,
            ewe_id=entry.ewe_id,
            position=position,
            heat_detected=entry.heat_detected,
            heat_date=entry.heat_date,
            sire_id=entry.sire_id,
            first_mating_date=entry.first_mating_date,
            attempt_number=entry.attempt_number,
            result_1=entry.result_for(1),
            result_2=entry.result_for(2),
            result_3=entry.result_for(3),
            finalized=entry.finalized,
        )

    def _to_domain(self, orm: BreedingPlanORM, ewes: list[BreedingPlanEweORM]) -> BreedingPlan:
        return BreedingPlan(
            id=orm.id,
            name=orm.name,
            start_date=orm.start_date,
            status=orm.status,
            sync_date=orm.sync_date,
            sire_id=orm.sire_id,
            ewes=[self._ewe_to_domain(e) for e in ewes],
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def _ewes_by_plan(self, plan_ids: list[UUID]) -> dict[UUID, list[BreedingPlanEweORM]]:
        grouped: dict[UUID, list[BreedingPlanEweORM]] = {pid: [] for pid in plan_ids}
        if not plan_ids:
            return grouped
        stmt = (
            select(BreedingPlanEweORM)
            .where(BreedingPlanEweORM.plan_id.in_(plan_ids))
            .order_by(BreedingPlanEweORM.position)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        for row in result.scalars().all():
            grouped[row.plan_id].append(row)
        return grouped

    async def _write_ewes(self, plan: BreedingPlan) -> None:
        await self.session.execute(
            delete(BreedingPlanEweORM).where(BreedingPlanEweORM.plan_id == plan.id)
        )
        # Flush removals before inserts so a ewe can change plans in one transaction
        await self.session.flush()
        for position, entry in enumerate(plan.ewes):
            self.session.add(self._ewe_to_orm(plan.id, position, entry))
        await self.session.flush()

    async def add(self, plan: BreedingPlan) -> BreedingPlan:
        orm = BreedingPlanORM(
            id=plan.id,
            name=plan.name,
            start_date=plan.start_date,
            status=plan.status,
            sync_date=plan.sync_date,
            sire_id=plan.sire_id,
            created_at=plan.created_at,
            updated_at=plan.updated_at,
            version=plan.version,
        )
        self.session.add(orm)
        try:
            with storage_errors("create breeding plan"):
                await self.session.flush()
                await self._write_ewes(plan)
        except IntegrityError as exc:
            raise ConflictError("Ewe already belongs to a breeding plan") from exc
        return await self.get(plan.id)

    async def get(self, plan_id: UUID) -> BreedingPlan | None:
        stmt = (
            select(BreedingPlanORM)
            .where(BreedingPlanORM.id == plan_id)
            .execution_options(populate_existing=True)
        )
        with storage_errors("load breeding plan"):
            result = await self.session.execute(stmt)
            orm = result.scalar_one_or_none()
            if not orm:
                return None
            ewes = await self._ewes_by_plan([orm.id])
        return self._to_domain(orm, ewes[orm.id])

    async def list(self) -> list[BreedingPlan]:
        stmt = (
            select(BreedingPlanORM)
            .order_by(BreedingPlanORM.created_at.desc())
            .execution_options(populate_existing=True)
        )
        with storage_errors("list breeding plans"):
            result = await self.session.execute(stmt)
            rows = result.scalars().all()
            ewes = await self._ewes_by_plan([r.id for r in rows])
        return [self._to_domain(r, ewes[r.id]) for r in rows]

    async def update(self, plan: BreedingPlan, expected_version: int) -> BreedingPlan | None:
        stmt = (
            update(BreedingPlanORM)
            .where(BreedingPlanORM.id == plan.id)
            .where(BreedingPlanORM.version == expected_version)
            .values(
                name=plan.name,
                start_date=plan.start_date,
                status=plan.status,
                sync_date=plan.sync_date,
                sire_id=plan.sire_id,
                updated_at=plan.updated_at,
                version=plan.version,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            with storage_errors("update breeding plan"):
                result = await self.session.execute(stmt)
                if result.rowcount == 0:
                    return None
                await self._write_ewes(plan)
        except IntegrityError as exc:
            raise ConflictError("Ewe already belongs to a breeding plan") from exc
        return await self.get(plan.id)

    async def delete(self, plan_id: UUID) -> bool:
        with storage_errors("delete breeding plan"):
            await self.session.execute(
                delete(BreedingPlanEweORM).where(BreedingPlanEweORM.plan_id == plan_id)
            )
            result = await self.session.execute(
                delete(BreedingPlanORM).where(BreedingPlanORM.id == plan_id)
            )
        return result.rowcount > 0
