from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from hiq_rota.db.models.rota_settings import WageTargetType


class GlobalConstraintsBase(BaseModel):
    wage_target_type: WageTargetType = WageTargetType.PERCENT
    wage_target_value: float = Field(default=28, ge=0)
    max_shifts_per_week: int = Field(default=5, ge=0, le=7)
    min_rest_hours_between_shifts: float = Field(default=11, ge=8)
    max_consecutive_days_worked: int = Field(default=6, ge=0)


class GlobalConstraintsUpdate(GlobalConstraintsBase):
    pass


class GlobalConstraintsResponse(GlobalConstraintsBase):
    location_id: int
    updated_at: datetime

    class Config:
        from_attributes = True


class AlgorithmConfigBase(BaseModel):
    salaried_weight: float = Field(default=100, ge=0)
    manager_weight: float = Field(default=50, ge=0)
    hi_score_weight: float = Field(default=1, ge=0)
    enable_part_shifts: bool = True
    min_part_shift_hours: float = Field(default=3, ge=0)
    max_part_shift_hours: float = Field(default=5, ge=0)

    @model_validator(mode="after")
    def check_part_shift_range(self):
        if self.min_part_shift_hours > self.max_part_shift_hours:
            raise ValueError("min_part_shift_hours must not exceed max_part_shift_hours")
        return self


class AlgorithmConfigUpdate(AlgorithmConfigBase):
    pass


class AlgorithmConfigResponse(AlgorithmConfigBase):
    location_id: int
    updated_at: datetime

    class Config:
        from_attributes = True
