from pydantic import BaseModel, Field
from datetime import date, datetime, time
from typing import Dict, List, Optional
from hiq_rota.db.models.rotas import RotaRequestStatus, RotaScheduleStatus


class RotaGenerateRequest(BaseModel):
    location_id: int
    week_start: date  # Monday
    revenue_forecast: Dict[date, float]  # date -> forecast revenue
    requested_by: Optional[int] = None


class RotaGenerateResponse(BaseModel):
    request_id: int
    schedule_id: int
    shift_count: int
    assigned_count: int
    unfilled_count: int
    total_cost: float
    revenue_forecast: float
    cost_percentage: float
    wage_target_met: bool
    warnings: List[str] = []


class RotaRequestResponse(BaseModel):
    id: int
    location_id: int
    week_start_date: date
    week_end_date: date
    status: RotaRequestStatus
    requested_by: Optional[int]
    revenue_forecast: Dict[str, float]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RotaScheduleResponse(BaseModel):
    id: int
    request_id: int
    location_id: int
    week_start_date: date
    week_end_date: date
    status: RotaScheduleStatus
    total_cost: float
    revenue_forecast: float
    cost_percentage: float
    unfilled_count: int
    created_by: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RotaShiftResponse(BaseModel):
    id: int
    schedule_id: int
    staff_id: Optional[int]  # None = unfilled
    job_role_id: int
    shift_rule_id: Optional[int]
    shift_date: date = Field(serialization_alias="date")
    start_time: time
    end_time: time
    hours: float
    break_minutes: int
    is_part_shift: bool
    is_secondary_role: bool
    basic_pay: float
    ni_cost: float
    pension_cost: float
    total_cost: float

    class Config:
        from_attributes = True
