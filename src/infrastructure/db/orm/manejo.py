from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class ManejoORM(Base):
    __tablename__ = "manejos"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    planned_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    planned_time: Mapped[str] = mapped_column(String(5), nullable=False)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    # Tagged recurrence rule, see rule_to_dict / rule_from_dict
    rule: Mapped[dict] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    execution_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    collaborator: Mapped[str | None] = mapped_column(String(255), nullable=True)
    procedure: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    group_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    sheep_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    edited_by_manager: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_edited_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
