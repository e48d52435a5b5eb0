from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import InvalidStateError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import (
    load_plan,
    load_sheep,
    require_entry,
    save_plan,
    update_sheep_fields,
)
from src.domain.models.breeding_plan import CYCLES, BreedingPlan, CycleResult

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    plan_id: UUID,
    ewe_id: UUID,
    cycle: int,
    result: str,
) -> BreedingPlan:
    if cycle not in CYCLES:
        raise ValidationError("Cycle must be 1, 2 or 3")
    if result not in (CycleResult.PREGNANT.value, CycleResult.EMPTY.value):
        raise ValidationError("Result must be PREGNANT or EMPTY")

    plan = await load_plan(uow, plan_id)
    entry = require_entry(plan, ewe_id)
    if entry.finalized:
        raise InvalidStateError("Breeding cycle already finalized for this ewe")
    if cycle < entry.attempt_number:
        raise InvalidStateError(f"Cycle {cycle} is already closed")
    if not entry.can_open_cycle(cycle):
        raise InvalidStateError(
            f"Cycle {cycle} requires cycle {cycle - 1} to be EMPTY",
            details={"previous_result": entry.result_for(cycle - 1)},
        )

    await load_sheep(uow, ewe_id)

    # Sheep first: if the plan write fails the result can be recorded again
    if result == CycleResult.PREGNANT.value:
        sire_id = entry.sire_id or plan.sire_id
        await update_sheep_fields(uow, ewe_id, {"pregnant": True, "sire_id": sire_id})
    entry.record_result(cycle, result)
    updated = await save_plan(uow, plan)
    await uow.commit()
    logger.info(
        "Cycle %d result %s recorded for ewe %s in plan %s", cycle, result, ewe_id, plan_id
    )
    return updated
