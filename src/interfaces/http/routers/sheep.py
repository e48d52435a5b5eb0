from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.application.use_cases.sheep import create_sheep, get_sheep, list_sheep, update_sheep
from src.interfaces.http.deps import get_uow
from src.interfaces.http.schemas.sheep import SheepCreate, SheepResponse, SheepUpdate

router = APIRouter(prefix="/sheep", tags=["sheep"])


@router.get("/", response_model=list[SheepResponse])
async def list_sheep_endpoint(
    sex: str | None = Query(None, description="MALE or FEMALE"),
    status_code: str | None = Query(None, alias="status"),
    group_id: UUID | None = Query(None),
    uow=Depends(get_uow),
) -> list[SheepResponse]:
    items = await list_sheep.execute(uow, sex=sex, status=status_code, group_id=group_id)
    return [SheepResponse.model_validate(item) for item in items]


@router.post("/", response_model=SheepResponse, status_code=status.HTTP_201_CREATED)
async def create_sheep_endpoint(payload: SheepCreate, uow=Depends(get_uow)) -> SheepResponse:
    created = await create_sheep.execute(
        uow, create_sheep.CreateSheepInput(**payload.model_dump())
    )
    return SheepResponse.model_validate(created)


@router.get("/{sheep_id}", response_model=SheepResponse)
async def get_sheep_endpoint(sheep_id: UUID, uow=Depends(get_uow)) -> SheepResponse:
    return SheepResponse.model_validate(await get_sheep.execute(uow, sheep_id))


@router.patch("/{sheep_id}", response_model=SheepResponse)
async def update_sheep_endpoint(
    sheep_id: UUID, payload: SheepUpdate, uow=Depends(get_uow)
) -> SheepResponse:
    updated = await update_sheep.execute(
        uow, sheep_id, update_sheep.UpdateSheepInput(**payload.model_dump())
    )
    return SheepResponse.model_validate(updated)
