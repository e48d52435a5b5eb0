from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.sheep import Sheep
from src.domain.value_objects.sex import Sex
from src.domain.value_objects.sheep_status import SheepStatus


@dataclass(slots=True)
class CreateSheepInput:
    tag: str
    sex: str
    status: str = SheepStatus.ACTIVE.value
    name: str | None = None
    birth_date: date | None = None
    pregnant: bool = False
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    group_id: UUID | None = None
    paddock_id: UUID | None = None
    weight: float | None = None
    notes: str | None = None


def validate_codes(sex: str | None, status: str | None) -> None:
    if sex is not None and sex not in {s.value for s in Sex}:
        raise ValidationError("Invalid sex. Must be MALE or FEMALE")
    if status is not None and status not in {s.value for s in SheepStatus}:
        raise ValidationError("Invalid status. Must be ACTIVE, CULLED or DECEASED")


async def execute(uow: UnitOfWork, payload: CreateSheepInput) -> Sheep:
    if not payload.tag or not payload.tag.strip():
        raise ValidationError("Tag is required")
    validate_codes(payload.sex, payload.status)
    if payload.pregnant and payload.sex != Sex.FEMALE.value:
        raise ValidationError("Only females can be pregnant")
    sheep = Sheep.create(
        tag=payload.tag.strip(),
        sex=payload.sex,
        status=payload.status,
        name=payload.name,
        birth_date=payload.birth_date,
        pregnant=payload.pregnant,
        sire_id=payload.sire_id,
        dam_id=payload.dam_id,
        group_id=payload.group_id,
        paddock_id=payload.paddock_id,
        weight=payload.weight,
        notes=payload.notes,
    )
    created = await uow.sheep.add(sheep)
    await uow.commit()
    return created
