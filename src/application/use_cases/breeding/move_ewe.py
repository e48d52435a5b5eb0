from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import (
    ConflictError,
    NotFoundError,
    PartialFailure,
    StorageError,
    ValidationError,
)
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import (
    ensure_breedable,
    load_plan,
    load_sheep,
    save_plan,
)
from src.domain.models.breeding_plan import BreedingPlan

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    source_plan_id: UUID,
    target_plan_id: UUID,
    ewe_id: UUID,
) -> BreedingPlan:
    """Move a ewe to another plan, restarting her cycle there.

    Safe to re-run after a failure: a ewe already in the target is left alone,
    a leftover copy in the source is dropped, and a ewe that left the source
    without reaching the target is inserted.
    """
    if source_plan_id == target_plan_id:
        raise ValidationError("Source and target plans must differ")
    source = await load_plan(uow, source_plan_id)
    target = await load_plan(uow, target_plan_id)
    in_source = source.find_ewe(ewe_id) is not None
    in_target = target.find_ewe(ewe_id) is not None

    if not in_source:
        if in_target:
            logger.info("Ewe %s already in plan %s; move is a no-op", ewe_id, target_plan_id)
            return target
        others = [
            p for p in await uow.breeding_plans.list() if p.find_ewe(ewe_id) is not None
        ]
        if others:
            raise NotFoundError(
                f"Ewe {ewe_id} is not in breeding plan {source_plan_id}",
                details={"plan_id": str(source_plan_id), "ewe_id": str(ewe_id)},
            )
        # Completing an interrupted move still requires an eligible ewe
        ensure_breedable(await load_sheep(uow, ewe_id))
        logger.warning("Completing interrupted move of ewe %s to plan %s", ewe_id, target_plan_id)

    if in_source:
        source.remove_ewe(ewe_id)
        await save_plan(uow, source)
    if in_target:
        await uow.commit()
        return target

    target.add_ewe(ewe_id)
    try:
        updated = await save_plan(uow, target)
    except (StorageError, ConflictError) as exc:
        if uow.atomic or not in_source:
            raise
        raise PartialFailure(
            "Ewe was removed from the source plan but not added to the target",
            details={
                "source_removed": True,
                "target_inserted": False,
                "ewe_id": str(ewe_id),
                "cause": exc.code,
            },
        ) from exc
    await uow.commit()
    logger.info("Ewe %s moved from plan %s to %s", ewe_id, source_plan_id, target_plan_id)
    return updated
