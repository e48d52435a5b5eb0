from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork
from src.infrastructure.db.errors import storage_errors


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    atomic = True

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.sheep = None
        self.breeding_plans = None
        self.manejos = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.breeding_plans_sqlalchemy import (
            BreedingPlansSQLAlchemyRepository,
        )
        from src.infrastructure.repos.manejos_sqlalchemy import ManejosSQLAlchemyRepository
        from src.infrastructure.repos.sheep_sqlalchemy import SheepSQLAlchemyRepository

        self.sheep = SheepSQLAlchemyRepository(self.session)
        self.breeding_plans = BreedingPlansSQLAlchemyRepository(self.session)
        self.manejos = ManejosSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.sheep = None
            self.breeding_plans = None
            self.manejos = None

    async def commit(self) -> None:
        if not self.session:
            return
        with storage_errors("commit changes"):
            await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
