from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import InvalidStateError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.manejos.common import load_manejo, save_manejo
from src.domain.models.manejo import Manejo
from src.domain.services.recurrence_projector import advance_after_completion
from src.domain.value_objects.recurrence import with_series

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CompleteManejoInput:
    execution_date: date
    collaborator: str | None = None
    notes: str | None = None


@dataclass(slots=True)
class CompleteManejoResult:
    completed: Manejo
    next_manejo: Manejo | None = None


async def execute(
    uow: UnitOfWork, manejo_id: UUID, payload: CompleteManejoInput
) -> CompleteManejoResult:
    manejo = await load_manejo(uow, manejo_id)
    if not manejo.is_pending:
        raise InvalidStateError(f"Manejo {manejo_id} is not pending")

    advance = advance_after_completion(manejo)
    manejo.complete(payload.execution_date, payload.collaborator, payload.notes)
    completed = await save_manejo(uow, manejo)

    next_manejo = None
    if advance is not None:
        rule = with_series(
            manejo.rule,
            reference_start_date=manejo.rule.reference_start_date or manejo.planned_date,
            occurrence_count=advance.occurrence_count,
        )
        next_manejo = await uow.manejos.add(manejo.successor(advance.next_date, rule))
        logger.info(
            "Manejo %s done; occurrence %d seeded for %s",
            manejo_id,
            advance.occurrence_count,
            advance.next_date,
        )
    await uow.commit()
    return CompleteManejoResult(completed=completed, next_manejo=next_manejo)
