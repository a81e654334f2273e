from __future__ import annotations
import datetime as dt
from typing import Literal, Optional
from pydantic import Field
from app.schemas.common import CamelModel

Gender = Literal["male", "female", "other"]

class ChildBase(CamelModel):
    first_name: str = Field(min_length=1, max_length=80)
    last_name: str = Field(min_length=1, max_length=80)
    birth_date: dt.date
    gender: Gender = "other"
    allergies: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    center_id: Optional[str] = None
    classroom_id: Optional[str] = None

class ChildCreate(ChildBase):
    pass

class ChildUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    birth_date: Optional[dt.date] = None
    gender: Optional[Gender] = None
    allergies: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    center_id: Optional[str] = None
    classroom_id: Optional[str] = None

class Child(ChildBase):
    id: str
    gender: str = "other"
    is_active: bool
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
