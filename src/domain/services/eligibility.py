from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from src.domain.models.breeding_plan import BreedingPlan
from src.domain.models.sheep import Sheep


def assigned_ewe_ids(plans: Iterable[BreedingPlan]) -> set[UUID]:
    ids: set[UUID] = set()
    for plan in plans:
        ids.update(plan.member_ids())
    return ids


def is_breedable(sheep: Sheep) -> bool:
    return sheep.is_female and sheep.is_active and not sheep.pregnant


def available_ewes(
    sheep: Iterable[Sheep],
    plans: Iterable[BreedingPlan],
    *,
    group_id: UUID | None = None,
) -> list[Sheep]:
    """Females that are active, open and not enrolled in any plan."""
    taken = assigned_ewe_ids(plans)
    return [
        s
        for s in sheep
        if is_breedable(s)
        and s.id not in taken
        and (group_id is None or s.group_id == group_id)
    ]
