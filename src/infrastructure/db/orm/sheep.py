from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Boolean, Date, DateTime, Float, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class SheepORM(Base):
    __tablename__ = "sheep"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    tag: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sex: Mapped[str] = mapped_column(String(16), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    pregnant: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sire_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    dam_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    group_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True, index=True)
    paddock_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
