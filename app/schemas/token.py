# app/schemas/token.py
from typing import Optional
from pydantic import EmailStr, Field
from app.schemas.common import CamelModel
from app.schemas.user import UserOut

class LoginIn(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

class RefreshIn(CamelModel):
    refresh_token: str

class TokenPair(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class AuthResponse(TokenPair):
    user: Optional[UserOut] = None
