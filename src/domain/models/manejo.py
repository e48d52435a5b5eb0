from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from src.domain.value_objects.recurrence import NoRecurrence, Recurrence, RecurrenceRule

DEFAULT_PLANNED_TIME = "08:00"


class ManejoStatus(str, Enum):
    PENDING = "PENDING"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class ManejoKind(str, Enum):
    RECURRING = "RECURRING"
    SEASONAL = "SEASONAL"
    UNPREDICTABLE = "UNPREDICTABLE"


@dataclass(slots=True)
class Manejo:
    """A scheduled husbandry task.

    Targets are either a group (`group_id`), an explicit list of animals
    (`sheep_ids`) or neither, meaning the whole active flock.
    """

    id: UUID
    title: str
    planned_date: date
    planned_time: str = DEFAULT_PLANNED_TIME
    kind: str = ManejoKind.RECURRING.value
    rule: RecurrenceRule = field(default_factory=NoRecurrence)
    status: str = ManejoStatus.PENDING.value
    execution_date: date | None = None
    collaborator: str | None = None
    procedure: str | None = None
    notes: str | None = None
    group_id: UUID | None = None
    sheep_ids: list[UUID] = field(default_factory=list)
    edited_by_manager: bool = False
    last_edited_at: datetime | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        title: str,
        planned_date: date,
        planned_time: str | None = None,
        kind: str = ManejoKind.RECURRING.value,
        rule: RecurrenceRule | None = None,
        collaborator: str | None = None,
        procedure: str | None = None,
        notes: str | None = None,
        group_id: UUID | None = None,
        sheep_ids: list[UUID] | None = None,
    ) -> Manejo:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            title=title.strip().upper(),
            planned_date=planned_date,
            planned_time=planned_time or DEFAULT_PLANNED_TIME,
            kind=kind,
            rule=rule or NoRecurrence(),
            collaborator=collaborator.upper() if collaborator else None,
            procedure=procedure,
            notes=notes.upper() if notes else None,
            group_id=group_id,
            # A group target wins over an explicit list
            sheep_ids=[] if group_id else list(sheep_ids or []),
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def recurrence(self) -> Recurrence:
        return self.rule.kind

    @property
    def is_pending(self) -> bool:
        return self.status == ManejoStatus.PENDING.value

    def complete(self, execution_date: date, collaborator: str | None, notes: str | None) -> None:
        self.status = ManejoStatus.DONE.value
        self.execution_date = execution_date
        if collaborator:
            self.collaborator = collaborator.upper()
        if notes is not None:
            self.notes = notes

    def successor(self, planned_date: date, rule: RecurrenceRule) -> Manejo:
        """The next pending instance of a recurring series."""
        now = datetime.now(timezone.utc)
        return replace(
            self,
            id=uuid4(),
            planned_date=planned_date,
            rule=rule,
            status=ManejoStatus.PENDING.value,
            execution_date=None,
            notes=None,
            sheep_ids=list(self.sheep_ids),
            edited_by_manager=False,
            last_edited_at=None,
            created_at=now,
            updated_at=now,
            version=1,
        )

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
