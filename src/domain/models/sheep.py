from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.sex import Sex
from src.domain.value_objects.sheep_status import SheepStatus


@dataclass(slots=True)
class Sheep:
    id: UUID
    tag: str
    sex: str
    status: str = SheepStatus.ACTIVE.value
    name: str | None = None
    birth_date: date | None = None
    pregnant: bool = False

    # Genealogy fields
    sire_id: UUID | None = None
    dam_id: UUID | None = None

    # Placement
    group_id: UUID | None = None
    paddock_id: UUID | None = None

    weight: float | None = None
    notes: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        tag: str,
        sex: str,
        status: str = SheepStatus.ACTIVE.value,
        name: str | None = None,
        birth_date: date | None = None,
        pregnant: bool = False,
        sire_id: UUID | None = None,
        dam_id: UUID | None = None,
        group_id: UUID | None = None,
        paddock_id: UUID | None = None,
        weight: float | None = None,
        notes: str | None = None,
    ) -> Sheep:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            tag=tag,
            sex=sex,
            status=status,
            name=name,
            birth_date=birth_date,
            pregnant=pregnant,
            sire_id=sire_id,
            dam_id=dam_id,
            group_id=group_id,
            paddock_id=paddock_id,
            weight=weight,
            notes=notes,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_female(self) -> bool:
        return self.sex == Sex.FEMALE.value

    @property
    def is_active(self) -> bool:
        return self.status == SheepStatus.ACTIVE.value

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
