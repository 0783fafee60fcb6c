from typing import Optional
from datetime import datetime
from enum import Enum
from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, Float, ForeignKey, Integer, JSON, String, func
from sqlalchemy.orm import Mapped, mapped_column
from hiq_rota.db.database import Base


class EmploymentType(str, Enum):
    HOURLY = "hourly"
    SALARIED = "salaried"
    CONTRACTOR = "contractor"


class StaffProfiles(Base):
    __tablename__ = "staff_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(80), nullable=False)
    last_name: Mapped[str] = mapped_column(String(80), nullable=False, default="")
    job_title: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    secondary_job_roles: Mapped[list] = mapped_column(JSON, nullable=False, default=list)  # job titles
    employment_type: Mapped[EmploymentType] = mapped_column(SQLEnum(EmploymentType, name="employment_type_enum", values_callable=lambda e: [m.value for m in e]), nullable=False, default=EmploymentType.HOURLY)
    wage_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    annual_salary: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    contractor_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    is_full_time_student: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    available_for_rota: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    max_hours_per_week: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
