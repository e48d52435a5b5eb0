from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models.breeding_plan import BreedingPlan, BreedingPlanEwe, summarize
from src.domain.services.breeding_calendar import SeasonPhase


class BreedingPlanCreate(BaseModel):
    name: str
    start_date: date
    sync_date: date | None = None
    sire_id: UUID | None = None
    ewe_ids: list[UUID] = Field(default_factory=list)


class BreedingPlanUpdate(BaseModel):
    name: str | None = None
    start_date: date | None = None
    sync_date: date | None = None
    sire_id: UUID | None = None
    status: str | None = None


class AddEweRequest(BaseModel):
    ewe_id: UUID


class MoveEweRequest(BaseModel):
    target_plan_id: UUID


class HeatRequest(BaseModel):
    detected: bool = True
    heat_date: date | None = None


class RamRequest(BaseModel):
    sire_id: UUID
    mating_date: date | None = None


class CycleResultRequest(BaseModel):
    cycle: int
    result: str


class PlanEweResponse(BaseModel):
    ewe_id: UUID
    heat_detected: bool
    heat_date: date | None
    sire_id: UUID | None
    first_mating_date: date | None
    attempt_number: int
    # Keys are cycle numbers as strings ("1", "2", "3")
    results: dict[str, str]
    finalized: bool
    pregnant: bool
    exhausted: bool

    @classmethod
    def from_domain(cls, entry: BreedingPlanEwe) -> PlanEweResponse:
        return cls(
            ewe_id=entry.ewe_id,
            heat_detected=entry.heat_detected,
            heat_date=entry.heat_date,
            sire_id=entry.sire_id,
            first_mating_date=entry.first_mating_date,
            attempt_number=entry.attempt_number,
            results={str(k): v for k, v in sorted(entry.results.items())},
            finalized=entry.finalized,
            pregnant=entry.is_pregnant,
            exhausted=entry.is_exhausted,
        )


class PlanSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    members: int
    pregnant: int
    exhausted: int
    pending: int


class BreedingPlanResponse(BaseModel):
    id: UUID
    name: str
    start_date: date
    status: str
    sync_date: date | None
    sire_id: UUID | None
    ewes: list[PlanEweResponse]
    summary: PlanSummaryResponse
    created_at: datetime
    updated_at: datetime
    version: int
    duplicate_name: bool = False

    @classmethod
    def from_domain(cls, plan: BreedingPlan, *, duplicate_name: bool = False) -> BreedingPlanResponse:
        return cls(
            id=plan.id,
            name=plan.name,
            start_date=plan.start_date,
            status=plan.status,
            sync_date=plan.sync_date,
            sire_id=plan.sire_id,
            ewes=[PlanEweResponse.from_domain(e) for e in plan.ewes],
            summary=PlanSummaryResponse.model_validate(summarize(plan)),
            created_at=plan.created_at,
            updated_at=plan.updated_at,
            version=plan.version,
            duplicate_name=duplicate_name,
        )


class BreedingAlertResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    plan_id: UUID
    plan_name: str
    phase: SeasonPhase
    cycle: int | None
    countdown_days: int
    days_elapsed: int
