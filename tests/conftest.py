from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("STORAGE_BACKEND", "sql")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.domain.models.sheep import Sheep
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import breeding_plan, manejo, sheep  # noqa: F401
from src.infrastructure.local_store.document_store import LocalDocumentStore
from src.infrastructure.local_store.unit_of_work import LocalUnitOfWork
from src.interfaces.http.main import create_app


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "storage_backend": "sql",
            "log_level": "INFO",
            "environment": "test",
        }
    )


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client


@pytest.fixture()
def local_store(tmp_path) -> LocalDocumentStore:
    return LocalDocumentStore(tmp_path / "flock.json")


@pytest.fixture()
def uow(local_store: LocalDocumentStore) -> LocalUnitOfWork:
    return LocalUnitOfWork(local_store)


@pytest.fixture()
def add_sheep(uow: LocalUnitOfWork):
    async def _add(tag: str, sex: str = "FEMALE", **fields) -> Sheep:
        return await uow.sheep.add(Sheep.create(tag=tag, sex=sex, **fields))

    return _add
