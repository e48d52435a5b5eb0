from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID

from src.domain.models.breeding_plan import BreedingPlan

# Ram stays with the ewes for 3 days every 17-day estrus cycle
CYCLE_LENGTH_DAYS = 17
RAM_WINDOW_DAYS = 3
CYCLE_WINDOWS: tuple[tuple[int, int], ...] = tuple(
    (n * CYCLE_LENGTH_DAYS, n * CYCLE_LENGTH_DAYS + RAM_WINDOW_DAYS) for n in range(3)
)


class SeasonPhase(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    RAM_IN = "RAM_IN"
    RAM_OUT = "RAM_OUT"
    FINISHED = "FINISHED"


@dataclass(slots=True, frozen=True)
class BreedingAlert:
    plan_id: UUID
    plan_name: str
    phase: SeasonPhase
    cycle: int | None
    countdown_days: int
    days_elapsed: int


def season_status(plan: BreedingPlan, today: date) -> BreedingAlert:
    elapsed = (today - plan.start_date).days
    phase = SeasonPhase.FINISHED
    cycle: int | None = None
    countdown = 0
    if elapsed < 0:
        phase, cycle, countdown = SeasonPhase.NOT_STARTED, 1, -elapsed
    else:
        for index, (start, end) in enumerate(CYCLE_WINDOWS, start=1):
            if start <= elapsed < end:
                phase, cycle, countdown = SeasonPhase.RAM_IN, index, end - elapsed
                break
            if elapsed < start:
                phase, cycle, countdown = SeasonPhase.RAM_OUT, index, start - elapsed
                break
    return BreedingAlert(
        plan_id=plan.id,
        plan_name=plan.name,
        phase=phase,
        cycle=cycle,
        countdown_days=countdown,
        days_elapsed=elapsed,
    )


def breeding_alerts(plans: list[BreedingPlan], today: date) -> list[BreedingAlert]:
    return [season_status(p, today) for p in plans if p.is_active]
