from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter

from src.domain.models.manejo import Manejo
from src.domain.value_objects.recurrence import RecurrenceRule, rule_from_dict, rule_to_dict


class _SeriesFields(BaseModel):
    duration_days: int | None = None
    reference_start_date: date | None = None
    occurrence_count: int = 0


class NoRecurrenceSchema(_SeriesFields):
    recurrence: Literal["NONE"]


class DailyRecurrenceSchema(_SeriesFields):
    recurrence: Literal["DAILY"]
    interval_days: int = 1


class WeeklyRecurrenceSchema(_SeriesFields):
    recurrence: Literal["WEEKLY"]
    # 0 = Sunday ... 6 = Saturday
    weekdays: list[int] = Field(default_factory=list)


class MonthlyRecurrenceSchema(_SeriesFields):
    recurrence: Literal["MONTHLY"]
    day_of_month: int | None = None


class YearlyRecurrenceSchema(_SeriesFields):
    recurrence: Literal["YEARLY"]
    # 0 = January ... 11 = December
    months: list[int] = Field(default_factory=list)


RecurrenceSchema = Annotated[
    Union[
        NoRecurrenceSchema,
        DailyRecurrenceSchema,
        WeeklyRecurrenceSchema,
        MonthlyRecurrenceSchema,
        YearlyRecurrenceSchema,
    ],
    Field(discriminator="recurrence"),
]

_recurrence_adapter = TypeAdapter(RecurrenceSchema)


def to_rule(schema: BaseModel | None) -> RecurrenceRule | None:
    if schema is None:
        return None
    return rule_from_dict(schema.model_dump(mode="json"))


def from_rule(rule: RecurrenceRule) -> BaseModel:
    return _recurrence_adapter.validate_python(rule_to_dict(rule))


class ManejoCreate(BaseModel):
    title: str
    planned_date: date
    planned_time: str | None = None
    kind: str = "RECURRING"
    rule: RecurrenceSchema | None = None
    collaborator: str | None = None
    procedure: str | None = None
    notes: str | None = None
    group_id: UUID | None = None
    sheep_ids: list[UUID] = Field(default_factory=list)


class ManejoUpdate(BaseModel):
    title: str | None = None
    planned_date: date | None = None
    planned_time: str | None = None
    kind: str | None = None
    rule: RecurrenceSchema | None = None
    procedure: str | None = None
    notes: str | None = None
    group_id: UUID | None = None
    sheep_ids: list[UUID] | None = None
    clear_targets: bool = False


class CompleteManejoRequest(BaseModel):
    execution_date: date | None = None
    collaborator: str | None = None
    notes: str | None = None


class ValidateDateRequest(BaseModel):
    rule: RecurrenceSchema
    date: date


class ValidateDateResponse(BaseModel):
    valid: bool
    reason: str | None = None
    suggested_date: date | None = None


class ManejoResponse(BaseModel):
    id: UUID
    title: str
    planned_date: date
    planned_time: str
    kind: str
    rule: RecurrenceSchema
    status: str
    execution_date: date | None
    collaborator: str | None
    procedure: str | None
    notes: str | None
    group_id: UUID | None
    sheep_ids: list[UUID]
    edited_by_manager: bool
    last_edited_at: datetime | None
    created_at: datetime
    updated_at: datetime
    version: int

    @classmethod
    def from_domain(cls, manejo: Manejo) -> ManejoResponse:
        return cls(
            id=manejo.id,
            title=manejo.title,
            planned_date=manejo.planned_date,
            planned_time=manejo.planned_time,
            kind=manejo.kind,
            rule=from_rule(manejo.rule),
            status=manejo.status,
            execution_date=manejo.execution_date,
            collaborator=manejo.collaborator,
            procedure=manejo.procedure,
            notes=manejo.notes,
            group_id=manejo.group_id,
            sheep_ids=list(manejo.sheep_ids),
            edited_by_manager=manejo.edited_by_manager,
            last_edited_at=manejo.last_edited_at,
            created_at=manejo.created_at,
            updated_at=manejo.updated_at,
            version=manejo.version,
        )


class CompleteManejoResponse(BaseModel):
    completed: ManejoResponse
    next_manejo: ManejoResponse | None = None


class OccurrenceResponse(BaseModel):
    manejo_id: UUID
    title: str
    date: date
    planned_time: str
    status: str
    recurrence: str


class CalendarResponse(BaseModel):
    start: date
    end: date
    occurrences: list[OccurrenceResponse]
    monthly_totals: dict[str, int]
