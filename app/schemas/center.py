from __future__ import annotations
import datetime as dt
from typing import Optional
from pydantic import EmailStr, Field
from app.schemas.common import CamelModel

class CenterBase(CamelModel):
    name: str = Field(min_length=1, max_length=160)
    description: Optional[str] = None
    address: str = Field(min_length=1, max_length=255)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    open_time: Optional[dt.time] = None
    close_time: Optional[dt.time] = None
    capacity: int = Field(default=100, ge=1)

class CenterCreate(CenterBase):
    pass

class CenterUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=160)
    description: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    open_time: Optional[dt.time] = None
    close_time: Optional[dt.time] = None
    capacity: Optional[int] = Field(default=None, ge=1)

class Center(CenterBase):
    id: str
    email: Optional[str] = None  # sem validação na saída
    is_active: bool
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
