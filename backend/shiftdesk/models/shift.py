from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Date, DateTime, Index, Integer, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from shiftdesk.core.db import Base


class Shift(Base):
    """A shift at a client on a given date.

    client_id / assigned_staff_member_id / notified_staff_member_ids are plain
    references resolved by the service on every read, not foreign keys: a
    permanently deleted client or staff member leaves the shift readable.
    """

    __tablename__ = "shifts"
    __table_args__ = (
        Index("ix_shifts_owner_service", "owner_email", "service_date", "start_time"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: uuid.uuid4().hex)
    owner_email: Mapped[str] = mapped_column(String(200), nullable=False, index=True)

    service_date: Mapped[object] = mapped_column(Date, nullable=False)
    start_time: Mapped[object] = mapped_column(Time, nullable=False)
    end_time: Mapped[object] = mapped_column(Time, nullable=False)
    break_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # minutes
    service_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    client_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    # legacy rows: denormalized name, no client_id
    client_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    assigned_staff_member_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    notified_staff_member_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # stored as string, validated with ShiftStatus in code
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="Drafted")
    note: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    assigned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    declined_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    in_progress_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    missed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    canceled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    timesheet_submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
