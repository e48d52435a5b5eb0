from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.use_cases.breeding import (
    add_ewe,
    assign_ram,
    breeding_alerts,
    confirm_heat,
    create_plan,
    delete_plan,
    discard_ewe,
    get_plan,
    list_available_ewes,
    list_plans,
    move_ewe,
    record_cycle_result,
    remove_ewe,
    update_plan,
)
from src.interfaces.http.deps import get_today, get_uow
from src.interfaces.http.schemas.breeding_plans import (
    AddEweRequest,
    BreedingAlertResponse,
    BreedingPlanCreate,
    BreedingPlanResponse,
    BreedingPlanUpdate,
    CycleResultRequest,
    HeatRequest,
    MoveEweRequest,
    RamRequest,
)
from src.interfaces.http.schemas.sheep import SheepResponse

router = APIRouter(prefix="/breeding-plans", tags=["breeding-plans"])


@router.get("/", response_model=list[BreedingPlanResponse])
async def list_plans_endpoint(uow=Depends(get_uow)) -> list[BreedingPlanResponse]:
    plans = await list_plans.execute(uow)
    return [BreedingPlanResponse.from_domain(p) for p in plans]


@router.post("/", response_model=BreedingPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan_endpoint(
    payload: BreedingPlanCreate, uow=Depends(get_uow)
) -> BreedingPlanResponse:
    result = await create_plan.execute(
        uow,
        create_plan.CreatePlanInput(
            name=payload.name,
            start_date=payload.start_date,
            sync_date=payload.sync_date,
            sire_id=payload.sire_id,
            initial_ewe_ids=payload.ewe_ids,
        ),
    )
    return BreedingPlanResponse.from_domain(result.plan, duplicate_name=result.duplicate_name)


@router.get("/available-ewes", response_model=list[SheepResponse])
async def available_ewes_endpoint(
    group_id: UUID | None = Query(None),
    uow=Depends(get_uow),
) -> list[SheepResponse]:
    ewes = await list_available_ewes.execute(uow, group_id=group_id)
    return [SheepResponse.model_validate(e) for e in ewes]


@router.get("/alerts", response_model=list[BreedingAlertResponse])
async def alerts_endpoint(
    uow=Depends(get_uow),
    today: date = Depends(get_today),
) -> list[BreedingAlertResponse]:
    alerts = await breeding_alerts.execute(uow, today)
    return [BreedingAlertResponse.model_validate(a) for a in alerts]


@router.get("/{plan_id}", response_model=BreedingPlanResponse)
async def get_plan_endpoint(plan_id: UUID, uow=Depends(get_uow)) -> BreedingPlanResponse:
    return BreedingPlanResponse.from_domain(await get_plan.execute(uow, plan_id))


@router.patch("/{plan_id}", response_model=BreedingPlanResponse)
async def update_plan_endpoint(
    plan_id: UUID, payload: BreedingPlanUpdate, uow=Depends(get_uow)
) -> BreedingPlanResponse:
    updated = await update_plan.execute(
        uow, plan_id, update_plan.UpdatePlanInput(**payload.model_dump())
    )
    return BreedingPlanResponse.from_domain(updated)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan_endpoint(plan_id: UUID, uow=Depends(get_uow)) -> Response:
    await delete_plan.execute(uow, plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{plan_id}/ewes", response_model=BreedingPlanResponse)
async def add_ewe_endpoint(
    plan_id: UUID, payload: AddEweRequest, uow=Depends(get_uow)
) -> BreedingPlanResponse:
    return BreedingPlanResponse.from_domain(await add_ewe.execute(uow, plan_id, payload.ewe_id))


@router.delete("/{plan_id}/ewes/{ewe_id}", response_model=BreedingPlanResponse)
async def remove_ewe_endpoint(
    plan_id: UUID, ewe_id: UUID, uow=Depends(get_uow)
) -> BreedingPlanResponse:
    return BreedingPlanResponse.from_domain(await remove_ewe.execute(uow, plan_id, ewe_id))


@router.post("/{plan_id}/ewes/{ewe_id}/move", response_model=BreedingPlanResponse)
async def move_ewe_endpoint(
    plan_id: UUID, ewe_id: UUID, payload: MoveEweRequest, uow=Depends(get_uow)
) -> BreedingPlanResponse:
    target = await move_ewe.execute(uow, plan_id, payload.target_plan_id, ewe_id)
    return BreedingPlanResponse.from_domain(target)


@router.post("/{plan_id}/ewes/{ewe_id}/heat", response_model=BreedingPlanResponse)
async def confirm_heat_endpoint(
    plan_id: UUID,
    ewe_id: UUID,
    payload: HeatRequest,
    uow=Depends(get_uow),
    today: date = Depends(get_today),
) -> BreedingPlanResponse:
    updated = await confirm_heat.execute(
        uow, plan_id, ewe_id, payload.detected, payload.heat_date, today=today
    )
    return BreedingPlanResponse.from_domain(updated)


@router.post("/{plan_id}/ewes/{ewe_id}/ram", response_model=BreedingPlanResponse)
async def assign_ram_endpoint(
    plan_id: UUID,
    ewe_id: UUID,
    payload: RamRequest,
    uow=Depends(get_uow),
    today: date = Depends(get_today),
) -> BreedingPlanResponse:
    updated = await assign_ram.execute(
        uow, plan_id, ewe_id, payload.sire_id, payload.mating_date, today=today
    )
    return BreedingPlanResponse.from_domain(updated)


@router.post("/{plan_id}/ewes/{ewe_id}/results", response_model=BreedingPlanResponse)
async def record_result_endpoint(
    plan_id: UUID, ewe_id: UUID, payload: CycleResultRequest, uow=Depends(get_uow)
) -> BreedingPlanResponse:
    updated = await record_cycle_result.execute(
        uow, plan_id, ewe_id, payload.cycle, payload.result
    )
    return BreedingPlanResponse.from_domain(updated)


@router.post("/{plan_id}/ewes/{ewe_id}/discard", response_model=SheepResponse)
async def discard_ewe_endpoint(
    plan_id: UUID, ewe_id: UUID, uow=Depends(get_uow)
) -> SheepResponse:
    return SheepResponse.model_validate(await discard_ewe.execute(uow, plan_id, ewe_id))
