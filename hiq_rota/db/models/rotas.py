from typing import Optional
from datetime import date, datetime, time
from enum import Enum
from sqlalchemy import Boolean, Date, DateTime, Enum as SQLEnum, Float, ForeignKey, Integer, JSON, Time, UniqueConstraint, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from hiq_rota.db.database import Base


class RotaRequestStatus(str, Enum):
    DRAFT = "draft"
    GENERATED = "generated"
    APPROVED = "approved"


class RotaScheduleStatus(str, Enum):
    DRAFT = "draft"
    APPROVED = "approved"
    PUBLISHED = "published"


class RotaRequests(Base):
    __tablename__ = "rota_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    week_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    week_end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[RotaRequestStatus] = mapped_column(SQLEnum(RotaRequestStatus, name="rota_request_status_enum", values_callable=lambda e: [m.value for m in e]), nullable=False, default=RotaRequestStatus.DRAFT)
    requested_by: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    revenue_forecast: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)  # ISO date -> revenue
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint('location_id', 'week_start_date', name='uix_rota_requests_location_week'),
    )


class RotaSchedules(Base):
    __tablename__ = "rota_schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    request_id: Mapped[int] = mapped_column(Integer, ForeignKey("rota_requests.id"), nullable=False, unique=True)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    week_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    week_end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[RotaScheduleStatus] = mapped_column(SQLEnum(RotaScheduleStatus, name="rota_schedule_status_enum", values_callable=lambda e: [m.value for m in e]), nullable=False, default=RotaScheduleStatus.DRAFT)
    total_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    revenue_forecast: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    cost_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    unfilled_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_by: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class RotaShifts(Base):
    __tablename__ = "rota_shifts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    schedule_id: Mapped[int] = mapped_column(Integer, ForeignKey("rota_schedules.id", ondelete="CASCADE"), nullable=False)
    staff_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("staff_profiles.id"), nullable=True)  # None = unfilled
    job_role_id: Mapped[int] = mapped_column(Integer, ForeignKey("job_roles.id"), nullable=False)
    shift_rule_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("shift_rules.id"), nullable=True)
    shift_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    hours: Mapped[float] = mapped_column(Float, nullable=False)
    break_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_part_shift: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_secondary_role: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    basic_pay: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    ni_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    pension_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    total_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    __table_args__ = (
        Index("ix_rota_shifts_schedule_date", "schedule_id", "date"),
    )
