from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.use_cases.manejos import (
    complete_manejo,
    create_manejo,
    delete_manejo,
    get_manejo,
    list_manejos,
    project_calendar,
    resolve_targets,
    update_manejo,
    validate_planned_date,
)
from src.domain.value_objects.recurrence import NoRecurrence
from src.interfaces.http.deps import get_default_planned_time, get_today, get_uow
from src.interfaces.http.schemas.manejos import (
    CalendarResponse,
    CompleteManejoRequest,
    CompleteManejoResponse,
    ManejoCreate,
    ManejoResponse,
    ManejoUpdate,
    OccurrenceResponse,
    ValidateDateRequest,
    ValidateDateResponse,
    to_rule,
)
from src.interfaces.http.schemas.sheep import SheepResponse

router = APIRouter(prefix="/manejos", tags=["manejos"])


@router.get("/", response_model=list[ManejoResponse])
async def list_manejos_endpoint(
    view: str = Query("all", description="today, upcoming, done or all"),
    uow=Depends(get_uow),
    today: date = Depends(get_today),
) -> list[ManejoResponse]:
    items = await list_manejos.execute(uow, view, today)
    return [ManejoResponse.from_domain(m) for m in items]


@router.post("/", response_model=ManejoResponse, status_code=status.HTTP_201_CREATED)
async def create_manejo_endpoint(
    payload: ManejoCreate,
    uow=Depends(get_uow),
    default_time: str = Depends(get_default_planned_time),
) -> ManejoResponse:
    data = payload.model_dump(exclude={"rule"})
    created = await create_manejo.execute(
        uow,
        create_manejo.CreateManejoInput(**data, rule=to_rule(payload.rule) or NoRecurrence()),
        default_time=default_time,
    )
    return ManejoResponse.from_domain(created)


@router.get("/calendar", response_model=CalendarResponse)
async def calendar_endpoint(
    start: date = Query(...),
    end: date = Query(...),
    uow=Depends(get_uow),
) -> CalendarResponse:
    projection = await project_calendar.execute(uow, start, end)
    return CalendarResponse(
        start=projection.window_start,
        end=projection.window_end,
        occurrences=[
            OccurrenceResponse(
                manejo_id=occ.manejo.id,
                title=occ.manejo.title,
                date=occ.date,
                planned_time=occ.planned_time,
                status=occ.manejo.status,
                recurrence=occ.manejo.recurrence.value,
            )
            for occ in projection.occurrences
        ],
        monthly_totals=projection.monthly_totals,
    )


@router.post("/validate-date", response_model=ValidateDateResponse)
async def validate_date_endpoint(payload: ValidateDateRequest) -> ValidateDateResponse:
    check = validate_planned_date.execute(to_rule(payload.rule), payload.date)
    return ValidateDateResponse(
        valid=check.valid, reason=check.reason, suggested_date=check.suggested_date
    )


@router.get("/{manejo_id}", response_model=ManejoResponse)
async def get_manejo_endpoint(manejo_id: UUID, uow=Depends(get_uow)) -> ManejoResponse:
    return ManejoResponse.from_domain(await get_manejo.execute(uow, manejo_id))


@router.put("/{manejo_id}", response_model=ManejoResponse)
async def update_manejo_endpoint(
    manejo_id: UUID, payload: ManejoUpdate, uow=Depends(get_uow)
) -> ManejoResponse:
    data = payload.model_dump(exclude={"rule"})
    updated = await update_manejo.execute(
        uow, manejo_id, update_manejo.UpdateManejoInput(**data, rule=to_rule(payload.rule))
    )
    return ManejoResponse.from_domain(updated)


@router.delete("/{manejo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_manejo_endpoint(manejo_id: UUID, uow=Depends(get_uow)) -> Response:
    await delete_manejo.execute(uow, manejo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{manejo_id}/complete", response_model=CompleteManejoResponse)
async def complete_manejo_endpoint(
    manejo_id: UUID,
    payload: CompleteManejoRequest,
    uow=Depends(get_uow),
    today: date = Depends(get_today),
) -> CompleteManejoResponse:
    result = await complete_manejo.execute(
        uow,
        manejo_id,
        complete_manejo.CompleteManejoInput(
            execution_date=payload.execution_date or today,
            collaborator=payload.collaborator,
            notes=payload.notes,
        ),
    )
    return CompleteManejoResponse(
        completed=ManejoResponse.from_domain(result.completed),
        next_manejo=(
            ManejoResponse.from_domain(result.next_manejo) if result.next_manejo else None
        ),
    )


@router.get("/{manejo_id}/targets", response_model=list[SheepResponse])
async def targets_endpoint(manejo_id: UUID, uow=Depends(get_uow)) -> list[SheepResponse]:
    sheep = await resolve_targets.execute(uow, manejo_id)
    return [SheepResponse.model_validate(s) for s in sheep]
