from __future__ import annotations
import datetime as dt
from typing import Optional
from pydantic import Field, model_validator
from app.schemas.common import CamelModel

class ClassroomBase(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    description: Optional[str] = None
    age_group_min: int = Field(ge=0)
    age_group_max: int = Field(ge=0)
    capacity: int = Field(ge=1)
    center_id: str

class ClassroomCreate(ClassroomBase):
    @model_validator(mode="after")
    def _age_range(self):
        if self.age_group_min > self.age_group_max:
            raise ValueError("ageGroupMin must not exceed ageGroupMax")
        return self

class ClassroomUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None
    age_group_min: Optional[int] = Field(default=None, ge=0)
    age_group_max: Optional[int] = Field(default=None, ge=0)
    capacity: Optional[int] = Field(default=None, ge=1)
    center_id: Optional[str] = None

class Classroom(ClassroomBase):
    id: str
    is_active: bool
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
