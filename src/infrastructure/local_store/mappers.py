from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import TypeAdapter

from src.domain.models.breeding_plan import BreedingPlan
from src.domain.models.manejo import Manejo
from src.domain.models.sheep import Sheep
from src.domain.value_objects.recurrence import rule_from_dict, rule_to_dict

_sheep_adapter = TypeAdapter(Sheep)
_plan_adapter = TypeAdapter(BreedingPlan)

_MANEJO_SCALARS = (
    "title",
    "planned_time",
    "kind",
    "status",
    "collaborator",
    "procedure",
    "notes",
    "edited_by_manager",
    "version",
)


def sheep_to_doc(sheep: Sheep) -> dict[str, Any]:
    return _sheep_adapter.dump_python(sheep, mode="json")


def sheep_from_doc(doc: dict[str, Any]) -> Sheep:
    return _sheep_adapter.validate_python(doc)


def plan_to_doc(plan: BreedingPlan) -> dict[str, Any]:
    return _plan_adapter.dump_python(plan, mode="json")


def plan_from_doc(doc: dict[str, Any]) -> BreedingPlan:
    return _plan_adapter.validate_python(doc)


def manejo_to_doc(manejo: Manejo) -> dict[str, Any]:
    doc = {name: getattr(manejo, name) for name in _MANEJO_SCALARS}
    doc.update(
        id=str(manejo.id),
        planned_date=manejo.planned_date.isoformat(),
        rule=rule_to_dict(manejo.rule),
        execution_date=manejo.execution_date.isoformat() if manejo.execution_date else None,
        group_id=str(manejo.group_id) if manejo.group_id else None,
        sheep_ids=[str(x) for x in manejo.sheep_ids],
        last_edited_at=manejo.last_edited_at.isoformat() if manejo.last_edited_at else None,
        created_at=manejo.created_at.isoformat(),
        updated_at=manejo.updated_at.isoformat(),
    )
    return doc


def _date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def manejo_from_doc(doc: dict[str, Any]) -> Manejo:
    return Manejo(
        id=UUID(doc["id"]),
        planned_date=date.fromisoformat(doc["planned_date"]),
        rule=rule_from_dict(doc.get("rule")),
        execution_date=_date(doc.get("execution_date")),
        group_id=UUID(doc["group_id"]) if doc.get("group_id") else None,
        sheep_ids=[UUID(x) for x in doc.get("sheep_ids", [])],
        last_edited_at=_dt(doc.get("last_edited_at")),
        created_at=_dt(doc["created_at"]),
        updated_at=_dt(doc["updated_at"]),
        **{name: doc[name] for name in _MANEJO_SCALARS if name in doc},
    )
