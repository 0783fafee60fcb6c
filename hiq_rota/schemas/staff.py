from pydantic import BaseModel, Field
from datetime import datetime, date
from typing import List, Optional
from hiq_rota.db.models.staff_profiles import EmploymentType


class StaffProfileBase(BaseModel):
    location_id: int
    first_name: str
    last_name: str = ""
    job_title: Optional[str] = None
    secondary_job_roles: List[str] = []
    employment_type: EmploymentType = EmploymentType.HOURLY
    wage_rate: Optional[float] = Field(default=None, ge=0)
    annual_salary: Optional[float] = Field(default=None, ge=0)
    contractor_rate: Optional[float] = Field(default=None, ge=0)
    is_full_time_student: bool = False
    available_for_rota: bool = True
    max_hours_per_week: Optional[float] = Field(default=None, ge=0)


class StaffProfileCreate(StaffProfileBase):
    pass


class StaffProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    job_title: Optional[str] = None
    secondary_job_roles: Optional[List[str]] = None
    employment_type: Optional[EmploymentType] = None
    wage_rate: Optional[float] = Field(default=None, ge=0)
    annual_salary: Optional[float] = Field(default=None, ge=0)
    contractor_rate: Optional[float] = Field(default=None, ge=0)
    is_full_time_student: Optional[bool] = None
    available_for_rota: Optional[bool] = None
    max_hours_per_week: Optional[float] = Field(default=None, ge=0)


class StaffProfileResponse(StaffProfileBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class HiScoreEvaluationCreate(BaseModel):
    weighted_score: Optional[float] = None
    evaluation_date: Optional[date] = None


class HiScoreEvaluationResponse(HiScoreEvaluationCreate):
    id: int
    profile_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class StaffRankingEntry(BaseModel):
    """One row of the location's staff priority ranking."""
    rank: int
    staff_id: int
    name: str
    job_title: Optional[str]
    employment_type: EmploymentType
    is_manager: bool
    hi_score: float
    priority_score: float
    hourly_cost_estimate: Optional[float]  # hourly staff only
    available_for_rota: bool
