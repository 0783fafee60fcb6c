from datetime import datetime
from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column
from hiq_rota.db.database import Base


class RevenueThresholds(Base):
    __tablename__ = "rota_revenue_thresholds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    revenue_min: Mapped[float] = mapped_column(Float, nullable=False)
    revenue_max: Mapped[float] = mapped_column(Float, nullable=False)
    foh_min_staff: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    foh_max_staff: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    kitchen_min_staff: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    kitchen_max_staff: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    kp_min_staff: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    kp_max_staff: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    target_cost_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=28)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
