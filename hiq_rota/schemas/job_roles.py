from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class JobRoleBase(BaseModel):
    location_id: int
    title: str
    is_kitchen: bool = False
    default_wage_rate: float = Field(default=0, ge=0)


class JobRoleCreate(JobRoleBase):
    pass


class JobRoleUpdate(BaseModel):
    title: Optional[str] = None
    is_kitchen: Optional[bool] = None
    default_wage_rate: Optional[float] = Field(default=None, ge=0)


class JobRoleResponse(JobRoleBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class JobRoleMappingBase(BaseModel):
    location_id: int
    job_title: str
    job_role_id: int
    priority: int = Field(default=1, ge=1)  # lower wins


class JobRoleMappingCreate(JobRoleMappingBase):
    pass


class JobRoleMappingUpdate(BaseModel):
    job_title: Optional[str] = None
    job_role_id: Optional[int] = None
    priority: Optional[int] = Field(default=None, ge=1)


class JobRoleMappingResponse(JobRoleMappingBase):
    id: int

    class Config:
        from_attributes = True
