from __future__ import annotations

from uuid import UUID

from src.application.errors import ConflictError, NotFoundError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.manejo import Manejo, ManejoKind
from src.domain.value_objects.recurrence import RecurrenceRule, validate_rule


async def load_manejo(uow: UnitOfWork, manejo_id: UUID) -> Manejo:
    manejo = await uow.manejos.get(manejo_id)
    if not manejo:
        raise NotFoundError(f"Manejo {manejo_id} not found")
    return manejo


async def save_manejo(uow: UnitOfWork, manejo: Manejo) -> Manejo:
    expected = manejo.version
    manejo.bump_version()
    updated = await uow.manejos.update(manejo, expected_version=expected)
    if not updated:
        raise ConflictError("Version mismatch while updating manejo")
    return updated


def ensure_valid_rule(rule: RecurrenceRule) -> None:
    try:
        validate_rule(rule)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def ensure_valid_kind(kind: str) -> None:
    valid = {k.value for k in ManejoKind}
    if kind not in valid:
        raise ValidationError(f"Invalid kind. Must be one of: {', '.join(sorted(valid))}")


def ensure_valid_time(value: str) -> None:
    hours, _, minutes = value.partition(":")
    if not (hours.isdigit() and minutes.isdigit() and len(minutes) == 2):
        raise ValidationError("Planned time must be HH:MM")
    if int(hours) > 23 or int(minutes) > 59:
        raise ValidationError("Planned time must be HH:MM")
