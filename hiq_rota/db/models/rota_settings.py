from datetime import datetime
from enum import Enum
from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, Float, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column
from hiq_rota.db.database import Base


class WageTargetType(str, Enum):
    PERCENT = "percent"
    ABSOLUTE = "absolute"
    HOURS = "hours"


class GlobalConstraints(Base):
    __tablename__ = "global_constraints"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey("locations.id"), nullable=False, unique=True)
    wage_target_type: Mapped[WageTargetType] = mapped_column(SQLEnum(WageTargetType, name="wage_target_type_enum", values_callable=lambda e: [m.value for m in e]), nullable=False, default=WageTargetType.PERCENT)
    wage_target_value: Mapped[float] = mapped_column(Float, nullable=False, default=28)
    max_shifts_per_week: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    min_rest_hours_between_shifts: Mapped[float] = mapped_column(Float, nullable=False, default=11)
    max_consecutive_days_worked: Mapped[int] = mapped_column(Integer, nullable=False, default=6)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class RotaAlgorithmConfigs(Base):
    __tablename__ = "rota_algorithm_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey("locations.id"), nullable=False, unique=True)
    salaried_weight: Mapped[float] = mapped_column(Float, nullable=False, default=100)
    manager_weight: Mapped[float] = mapped_column(Float, nullable=False, default=50)
    hi_score_weight: Mapped[float] = mapped_column(Float, nullable=False, default=1)
    enable_part_shifts: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    min_part_shift_hours: Mapped[float] = mapped_column(Float, nullable=False, default=3)
    max_part_shift_hours: Mapped[float] = mapped_column(Float, nullable=False, default=5)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
