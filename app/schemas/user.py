# app/schemas/user.py
from __future__ import annotations
from typing import Literal, Optional
from pydantic import EmailStr, Field
from app.schemas.common import CamelModel

RoleName = Literal["admin", "educator", "family"]

class UserBase(CamelModel):
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=80)
    last_name: str = Field(min_length=1, max_length=80)
    role: RoleName = "family"
    center_id: Optional[str] = None

class UserCreate(UserBase):
    password: str = Field(min_length=8, max_length=128)

class UserUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    role: Optional[RoleName] = None
    center_id: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)

class UserOut(CamelModel):
    id: str
    email: str          # str na saída; e-mails legados não quebram a resposta
    first_name: str
    last_name: str
    role: str
    center_id: Optional[str] = None
    is_active: bool = True
