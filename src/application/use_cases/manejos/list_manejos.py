from __future__ import annotations

from datetime import date
from enum import Enum

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.manejo import Manejo, ManejoStatus


class ManejoView(str, Enum):
    TODAY = "today"
    UPCOMING = "upcoming"
    DONE = "done"
    ALL = "all"


def _by_schedule(m: Manejo) -> tuple[date, str]:
    return (m.planned_date, m.planned_time)


def select_view(manejos: list[Manejo], view: str, today: date) -> list[Manejo]:
    """Filter and order tasks for one of the dashboard tabs."""
    if view == ManejoView.TODAY.value:
        due = [m for m in manejos if m.is_pending and m.planned_date <= today]
        done_today = [
            m
            for m in manejos
            if m.status == ManejoStatus.DONE.value and m.execution_date == today
        ]
        return sorted(due, key=_by_schedule) + sorted(done_today, key=_by_schedule)
    if view == ManejoView.UPCOMING.value:
        return sorted((m for m in manejos if m.is_pending and m.planned_date > today), key=_by_schedule)
    if view == ManejoView.DONE.value:
        done = [m for m in manejos if m.status == ManejoStatus.DONE.value]
        return sorted(done, key=lambda m: m.execution_date or m.planned_date, reverse=True)
    if view == ManejoView.ALL.value:
        return sorted(manejos, key=_by_schedule)
    valid = ", ".join(v.value for v in ManejoView)
    raise ValidationError(f"Invalid view. Must be one of: {valid}")


async def execute(uow: UnitOfWork, view: str, today: date) -> list[Manejo]:
    return select_view(await uow.manejos.list(), view, today)
