from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.services.recurrence_projector import ProjectedOccurrence, project


@dataclass(slots=True)
class CalendarProjection:
    window_start: date
    window_end: date
    occurrences: list[ProjectedOccurrence] = field(default_factory=list)
    # "YYYY-MM" -> number of occurrences in that month
    monthly_totals: dict[str, int] = field(default_factory=dict)


async def execute(uow: UnitOfWork, window_start: date, window_end: date) -> CalendarProjection:
    if window_end < window_start:
        raise ValidationError("Calendar end must not be before start")
    manejos = await uow.manejos.list()
    occurrences = list(project(manejos, window_start, window_end))
    totals = Counter(occ.date.strftime("%Y-%m") for occ in occurrences)
    return CalendarProjection(
        window_start=window_start,
        window_end=window_end,
        occurrences=occurrences,
        monthly_totals=dict(sorted(totals.items())),
    )
