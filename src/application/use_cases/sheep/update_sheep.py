from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import ConflictError, NotFoundError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.sheep.create_sheep import validate_codes
from src.domain.models.sheep import Sheep


@dataclass(slots=True)
class UpdateSheepInput:
    version: int
    tag: str | None = None
    name: str | None = None
    sex: str | None = None
    status: str | None = None
    birth_date: date | None = None
    pregnant: bool | None = None
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    group_id: UUID | None = None
    paddock_id: UUID | None = None
    weight: float | None = None
    notes: str | None = None


async def execute(uow: UnitOfWork, sheep_id: UUID, payload: UpdateSheepInput) -> Sheep:
    if payload.version < 1:
        raise ValidationError("Invalid version value")
    validate_codes(payload.sex, payload.status)
    existing = await uow.sheep.get(sheep_id)
    if not existing:
        raise NotFoundError("Sheep not found")
    data: dict = {}
    for field_name in (
        "tag",
        "name",
        "sex",
        "status",
        "birth_date",
        "pregnant",
        "sire_id",
        "dam_id",
        "group_id",
        "paddock_id",
        "weight",
        "notes",
    ):
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if not data:
        return existing
    updated = await uow.sheep.update(sheep_id, data, expected_version=payload.version)
    if not updated:
        raise ConflictError("Version mismatch while updating sheep")
    await uow.commit()
    return updated
