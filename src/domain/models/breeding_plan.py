from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class BreedingPlanStatus(str, Enum):
    SYNCHRONIZING = "SYNCHRONIZING"
    BREEDING = "BREEDING"
    COMPLETED = "COMPLETED"


class CycleResult(str, Enum):
    PENDING = "PENDING"
    PREGNANT = "PREGNANT"
    EMPTY = "EMPTY"


CYCLES = (1, 2, 3)
MAX_ATTEMPTS = 3


def _pending_results() -> dict[int, str]:
    return {cycle: CycleResult.PENDING.value for cycle in CYCLES}


@dataclass(slots=True)
class BreedingPlanEwe:
    ewe_id: UUID
    heat_detected: bool = False
    heat_date: date | None = None
    sire_id: UUID | None = None
    first_mating_date: date | None = None
    attempt_number: int = 1
    results: dict[int, str] = field(default_factory=_pending_results)
    finalized: bool = False

    @classmethod
    def fresh(cls, ewe_id: UUID) -> BreedingPlanEwe:
        return cls(ewe_id=ewe_id)

    def result_for(self, cycle: int) -> str:
        return self.results.get(cycle, CycleResult.PENDING.value)

    @property
    def current_result(self) -> str:
        return self.result_for(self.attempt_number)

    @property
    def is_pregnant(self) -> bool:
        return any(self.result_for(c) == CycleResult.PREGNANT.value for c in CYCLES)

    @property
    def is_exhausted(self) -> bool:
        """All three cycles came back empty; candidate for culling."""
        return self.finalized and self.result_for(MAX_ATTEMPTS) == CycleResult.EMPTY.value

    def can_open_cycle(self, cycle: int) -> bool:
        if cycle == 1:
            return True
        return self.result_for(cycle - 1) == CycleResult.EMPTY.value

    def set_heat(self, detected: bool, on: date | None) -> None:
        self.heat_detected = detected
        self.heat_date = on if detected else None
        if not detected:
            # Reverting heat also reverts the ram assignment
            self.sire_id = None
            self.first_mating_date = None

    def assign_ram(self, sire_id: UUID, on: date) -> None:
        self.sire_id = sire_id
        self.first_mating_date = on

    def record_result(self, cycle: int, result: str) -> None:
        self.results[cycle] = result
        if result == CycleResult.PREGNANT.value:
            self.finalized = True
        elif cycle >= MAX_ATTEMPTS:
            self.finalized = True
        else:
            self.attempt_number = cycle + 1


@dataclass(slots=True)
class BreedingPlan:
    id: UUID
    name: str
    start_date: date
    status: str = BreedingPlanStatus.BREEDING.value
    sync_date: date | None = None
    sire_id: UUID | None = None
    ewes: list[BreedingPlanEwe] = field(default_factory=list)

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        name: str,
        start_date: date,
        sync_date: date | None = None,
        sire_id: UUID | None = None,
        ewe_ids: list[UUID] | None = None,
    ) -> BreedingPlan:
        now = datetime.now(timezone.utc)
        status = (
            BreedingPlanStatus.SYNCHRONIZING.value
            if sync_date is not None
            else BreedingPlanStatus.BREEDING.value
        )
        return cls(
            id=uuid4(),
            name=normalize_plan_name(name),
            start_date=start_date,
            status=status,
            sync_date=sync_date,
            sire_id=sire_id,
            ewes=[BreedingPlanEwe.fresh(ewe_id) for ewe_id in ewe_ids or []],
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_active(self) -> bool:
        return self.status != BreedingPlanStatus.COMPLETED.value

    def member_ids(self) -> set[UUID]:
        return {e.ewe_id for e in self.ewes}

    def find_ewe(self, ewe_id: UUID) -> BreedingPlanEwe | None:
        for entry in self.ewes:
            if entry.ewe_id == ewe_id:
                return entry
        return None

    def add_ewe(self, ewe_id: UUID) -> BreedingPlanEwe:
        entry = BreedingPlanEwe.fresh(ewe_id)
        self.ewes.append(entry)
        return entry

    def remove_ewe(self, ewe_id: UUID) -> BreedingPlanEwe | None:
        entry = self.find_ewe(ewe_id)
        if entry is not None:
            self.ewes = [e for e in self.ewes if e.ewe_id != ewe_id]
        return entry

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)


def normalize_plan_name(name: str) -> str:
    return " ".join(name.split()).upper()


@dataclass(slots=True)
class PlanSummary:
    members: int
    pregnant: int
    exhausted: int
    pending: int


def summarize(plan: BreedingPlan) -> PlanSummary:
    pregnant = sum(1 for e in plan.ewes if e.is_pregnant)
    exhausted = sum(1 for e in plan.ewes if e.is_exhausted)
    return PlanSummary(
        members=len(plan.ewes),
        pregnant=pregnant,
        exhausted=exhausted,
        pending=sum(1 for e in plan.ewes if not e.finalized),
    )
