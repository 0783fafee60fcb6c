from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import time, datetime
from typing import List, Optional

DAY_CODES = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


def _normalise_days(days: Optional[List[str]]) -> Optional[List[str]]:
    if days is None:
        return None
    codes = []
    for day in days:
        code = day.strip().lower()[:3]
        if code not in DAY_CODES:
            raise ValueError(f"Unknown day of week: {day}")
        if code not in codes:
            codes.append(code)
    return codes


def _check_window(start, end):
    if start is not None and start == end:
        raise ValueError("start_time and end_time must differ")


class ShiftRuleBase(BaseModel):
    location_id: int
    job_role_id: int
    name: Optional[str] = None
    start_time: time
    end_time: time  # before start_time = finishes after midnight
    days_of_week: List[str]  # ["mon", "tue", ...]
    min_staff: int = Field(default=1, ge=0)
    max_staff: Optional[int] = Field(default=None, ge=0)
    priority: int = Field(default=3, ge=1)
    break_minutes: int = Field(default=0, ge=0)

    @field_validator("days_of_week")
    @classmethod
    def check_days(cls, v):
        return _normalise_days(v)

    @model_validator(mode="after")
    def check_window(self):
        _check_window(self.start_time, self.end_time)
        return self


class ShiftRuleCreate(ShiftRuleBase):
    pass


class ShiftRuleUpdate(BaseModel):
    job_role_id: Optional[int] = None
    name: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    days_of_week: Optional[List[str]] = None
    min_staff: Optional[int] = Field(default=None, ge=0)
    max_staff: Optional[int] = Field(default=None, ge=0)
    priority: Optional[int] = Field(default=None, ge=1)
    break_minutes: Optional[int] = Field(default=None, ge=0)
    archived: Optional[bool] = None

    @field_validator("days_of_week")
    @classmethod
    def check_days(cls, v):
        return _normalise_days(v)


class ShiftRuleResponse(ShiftRuleBase):
    id: int
    archived: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TroughPeriodBase(BaseModel):
    location_id: int
    start_time: time
    end_time: time
    days_of_week: List[str]

    @field_validator("days_of_week")
    @classmethod
    def check_days(cls, v):
        return _normalise_days(v)

    @model_validator(mode="after")
    def check_window(self):
        _check_window(self.start_time, self.end_time)
        return self


class TroughPeriodCreate(TroughPeriodBase):
    pass


class TroughPeriodUpdate(BaseModel):
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    days_of_week: Optional[List[str]] = None

    @field_validator("days_of_week")
    @classmethod
    def check_days(cls, v):
        return _normalise_days(v)


class TroughPeriodResponse(TroughPeriodBase):
    id: int

    class Config:
        from_attributes = True
