from typing import Optional
from datetime import date, datetime
from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column
from hiq_rota.db.database import Base


class HiScoreEvaluations(Base):
    __tablename__ = "hi_score_evaluations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    profile_id: Mapped[int] = mapped_column(Integer, ForeignKey("staff_profiles.id"), nullable=False, index=True)
    weighted_score: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    evaluation_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
