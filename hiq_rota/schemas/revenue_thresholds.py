from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Optional


class RevenueThresholdBase(BaseModel):
    location_id: int
    name: str
    revenue_min: float = Field(ge=0)
    revenue_max: float = Field(ge=0)
    foh_min_staff: int = Field(default=0, ge=0)
    foh_max_staff: int = Field(default=0, ge=0)
    kitchen_min_staff: int = Field(default=0, ge=0)
    kitchen_max_staff: int = Field(default=0, ge=0)
    kp_min_staff: int = Field(default=0, ge=0)
    kp_max_staff: int = Field(default=0, ge=0)
    target_cost_percentage: float = Field(default=28, ge=0)

    @model_validator(mode="after")
    def check_band(self):
        if self.revenue_max < self.revenue_min:
            raise ValueError("revenue_max must not be below revenue_min")
        return self


class RevenueThresholdCreate(RevenueThresholdBase):
    pass


class RevenueThresholdUpdate(BaseModel):
    name: Optional[str] = None
    revenue_min: Optional[float] = Field(default=None, ge=0)
    revenue_max: Optional[float] = Field(default=None, ge=0)
    foh_min_staff: Optional[int] = Field(default=None, ge=0)
    foh_max_staff: Optional[int] = Field(default=None, ge=0)
    kitchen_min_staff: Optional[int] = Field(default=None, ge=0)
    kitchen_max_staff: Optional[int] = Field(default=None, ge=0)
    kp_min_staff: Optional[int] = Field(default=None, ge=0)
    kp_max_staff: Optional[int] = Field(default=None, ge=0)
    target_cost_percentage: Optional[float] = Field(default=None, ge=0)


class RevenueThresholdResponse(RevenueThresholdBase):
    id: int
    updated_at: datetime

    class Config:
        from_attributes = True
