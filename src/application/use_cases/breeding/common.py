from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import ConflictError, NotFoundError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_plan import BreedingPlan, BreedingPlanEwe
from src.domain.models.sheep import Sheep
from src.domain.services.eligibility import assigned_ewe_ids

logger = logging.getLogger(__name__)


async def load_plan(uow: UnitOfWork, plan_id: UUID) -> BreedingPlan:
    plan = await uow.breeding_plans.get(plan_id)
    if not plan:
        raise NotFoundError(f"Breeding plan {plan_id} not found")
    return plan


def require_entry(plan: BreedingPlan, ewe_id: UUID) -> BreedingPlanEwe:
    entry = plan.find_ewe(ewe_id)
    if entry is None:
        raise NotFoundError(
            f"Ewe {ewe_id} is not in breeding plan {plan.id}",
            details={"plan_id": str(plan.id), "ewe_id": str(ewe_id)},
        )
    return entry


async def save_plan(uow: UnitOfWork, plan: BreedingPlan) -> BreedingPlan:
    expected = plan.version
    plan.bump_version()
    updated = await uow.breeding_plans.update(plan, expected_version=expected)
    if not updated:
        raise ConflictError("Version mismatch while updating breeding plan")
    return updated


async def load_sheep(uow: UnitOfWork, sheep_id: UUID) -> Sheep:
    sheep = await uow.sheep.get(sheep_id)
    if not sheep:
        raise NotFoundError(f"Sheep {sheep_id} not found")
    return sheep


def ensure_breedable(sheep: Sheep) -> None:
    if not sheep.is_female:
        raise ValidationError(f"Sheep {sheep.id} is not a female")
    if not sheep.is_active:
        raise ValidationError(f"Sheep {sheep.id} is not active")
    if sheep.pregnant:
        raise ValidationError(f"Sheep {sheep.id} is already pregnant")


async def ensure_not_enrolled(uow: UnitOfWork, ewe_ids: list[UUID]) -> None:
    plans = await uow.breeding_plans.list()
    taken = assigned_ewe_ids(plans) & set(ewe_ids)
    if taken:
        raise ConflictError(
            "Ewe already belongs to a breeding plan",
            details={"ewe_ids": sorted(str(x) for x in taken)},
        )


async def update_sheep_fields(uow: UnitOfWork, sheep_id: UUID, data: dict) -> Sheep:
    updated = await uow.sheep.update(sheep_id, data)
    if not updated:
        logger.warning("Sheep %s not found while applying %s", sheep_id, sorted(data))
        raise NotFoundError(f"Sheep {sheep_id} not found")
    return updated
