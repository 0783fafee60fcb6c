from datetime import datetime
from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from hiq_rota.db.database import Base


class JobRoles(Base):
    __tablename__ = "job_roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(80), nullable=False)
    is_kitchen: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    default_wage_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint('location_id', 'title', name='uix_job_roles_location_title'),
    )


class JobRoleMappings(Base):
    """Maps free-text job titles (as found on staff profiles) to job roles."""
    __tablename__ = "job_role_mappings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    location_id: Mapped[int] = mapped_column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    job_title: Mapped[str] = mapped_column(String(80), nullable=False)
    job_role_id: Mapped[int] = mapped_column(Integer, ForeignKey("job_roles.id"), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        UniqueConstraint('location_id', 'job_title', 'job_role_id', name='uix_job_role_mappings_unique'),
    )
