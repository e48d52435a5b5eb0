from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.breeding.common import (
    ensure_breedable,
    ensure_not_enrolled,
    load_sheep,
)
from src.domain.models.breeding_plan import BreedingPlan, normalize_plan_name

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreatePlanInput:
    name: str
    start_date: date
    sync_date: date | None = None
    sire_id: UUID | None = None
    initial_ewe_ids: list[UUID] = field(default_factory=list)


@dataclass(slots=True)
class CreatePlanResult:
    plan: BreedingPlan
    # Another plan still running under the same name
    duplicate_name: bool = False


async def execute(uow: UnitOfWork, payload: CreatePlanInput) -> CreatePlanResult:
    if not payload.name or not payload.name.strip():
        raise ValidationError("Plan name is required")
    if len(set(payload.initial_ewe_ids)) != len(payload.initial_ewe_ids):
        raise ValidationError("Duplicated ewe ids in plan request")

    for ewe_id in payload.initial_ewe_ids:
        ensure_breedable(await load_sheep(uow, ewe_id))
    await ensure_not_enrolled(uow, payload.initial_ewe_ids)

    name = normalize_plan_name(payload.name)
    existing = await uow.breeding_plans.list()
    duplicate = any(p.is_active and p.name == name for p in existing)
    if duplicate:
        logger.warning("Breeding plan name %s already used by an active plan", name)

    plan = BreedingPlan.create(
        name=name,
        start_date=payload.start_date,
        sync_date=payload.sync_date,
        sire_id=payload.sire_id,
        ewe_ids=payload.initial_ewe_ids,
    )
    created = await uow.breeding_plans.add(plan)
    await uow.commit()
    logger.info("Breeding plan %s created with %d ewes", created.id, len(created.ewes))
    return CreatePlanResult(plan=created, duplicate_name=duplicate)
