from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class BreedingPlanORM(Base):
    __tablename__ = "breeding_plans"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    sync_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    sire_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class BreedingPlanEweORM(Base):
    __tablename__ = "breeding_plan_ewes"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    plan_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("breeding_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # A ewe belongs to at most one plan
    ewe_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, unique=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    heat_detected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    heat_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    sire_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    first_mating_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    attempt_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    result_1: Mapped[str] = mapped_column(String(16), nullable=False, default="PENDING")
    result_2: Mapped[str] = mapped_column(String(16), nullable=False, default="PENDING")
    result_3: Mapped[str] = mapped_column(String(16), nullable=False, default="PENDING")
    finalized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
