from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class SheepCreate(BaseModel):
    tag: str
    sex: str
    status: str = "ACTIVE"
    name: str | None = None
    birth_date: date | None = None
    pregnant: bool = False
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    group_id: UUID | None = None
    paddock_id: UUID | None = None
    weight: float | None = None
    notes: str | None = None


class SheepUpdate(BaseModel):
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


class SheepResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tag: str
    sex: str
    status: str
    name: str | None
    birth_date: date | None
    pregnant: bool
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    group_id: UUID | None = None
    paddock_id: UUID | None = None
    weight: float | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
    version: int
