from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class LocationBase(BaseModel):
    name: str


class LocationCreate(LocationBase):
    pass


class LocationUpdate(BaseModel):
    name: Optional[str] = None


class LocationResponse(LocationBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
