from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date

from fastapi import Request

from src.application.interfaces.unit_of_work import UnitOfWork
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.local_store.unit_of_work import LocalUnitOfWork
from src.utils.local_dates import today_local


async def get_uow(request: Request) -> AsyncIterator[UnitOfWork]:
    local_store = getattr(request.app.state, "local_store", None)
    if local_store is not None:
        uow: UnitOfWork = LocalUnitOfWork(local_store)
    else:
        session_factory = getattr(request.app.state, "session_factory", None)
        if session_factory is None:
            raise RuntimeError("Session factory not configured")
        uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_today(request: Request) -> date:
    """Current calendar date on the farm."""
    settings = get_app_settings(request)
    return today_local(settings.tz)


def get_default_planned_time(request: Request) -> str:
    return get_app_settings(request).default_planned_time
