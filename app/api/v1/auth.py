# app/api/v1/auth.py
from __future__ import annotations
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Body, Query
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.api.deps import get_db, get_current_user
from app.core.tokens import create_access_token, create_refresh_token, decode_refresh
from app.core.security_password import check_user_password
from app.crud.user import user_crud, normalize_email
from app.models.tokens import RefreshToken
from app.models.user import User
from app.schemas.token import AuthResponse, LoginIn
from app.schemas.user import UserOut

logger = logging.getLogger(__name__)

router = APIRouter()

# ---------- helpers ----------
def _authenticate(db: Session, email: str, password: str) -> User:
    user = user_crud.get_by_email(db, normalize_email(email))
    if not user or not user.is_active:
        logger.warning("login failed for %s: unknown user", email)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if not check_user_password(user, password):
        logger.warning("login failed for %s: bad password", email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if user in db.dirty:
        db.commit()
    return user

def _store_refresh(db: Session, user: User, refresh_token: str) -> None:
    payload = decode_refresh(refresh_token)
    db.add(RefreshToken(
        jti=payload["jti"],
        user_id=user.id,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    ))

def issue_tokens_for(db: Session, user: User) -> AuthResponse:
    access = create_access_token(sub=user.id, role=user.role)
    refresh_token = create_refresh_token(sub=user.id)
    _store_refresh(db, user, refresh_token)
    db.commit()
    return AuthResponse(
        access_token=access,
        refresh_token=refresh_token,
        user=UserOut.model_validate(user),
    )

def _get_token_from_body_or_query(token_body: str | None, token_query: str | None) -> str:
    tok = token_body or token_query
    if not tok:
        raise HTTPException(status_code=422, detail=[{"loc": ["refreshToken"], "msg": "Field required", "type": "value_error.missing"}])
    return tok

def _active_refresh_row(db: Session, payload: dict) -> RefreshToken | None:
    rt = db.execute(select(RefreshToken).where(RefreshToken.jti == payload["jti"])).scalar_one_or_none()
    if rt is None or rt.revoked_at is not None:
        return None
    return rt

# ---------- endpoints ----------
@router.post("/login", response_model=AuthResponse)
def login(body: LoginIn, db: Session = Depends(get_db)):
    user = _authenticate(db, body.email, body.password)
    logger.info("user %s logged in", user.id)
    return issue_tokens_for(db, user)

@router.post("/token", response_model=AuthResponse)
def login_oauth2_form(
    form: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    if not form.username or not form.password:
        raise HTTPException(status_code=400, detail="E-mail and password are required")
    user = _authenticate(db, form.username, form.password)
    return issue_tokens_for(db, user)

@router.post("/refresh", response_model=AuthResponse)
def refresh(
    token: str | None = Body(default=None, embed=True, alias="refreshToken"),
    token_q: str | None = Query(default=None, alias="token"),
    db: Session = Depends(get_db),
):
    tok = _get_token_from_body_or_query(token, token_q)
    payload = decode_refresh(tok)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token")

    rt = _active_refresh_row(db, payload)
    if rt is None:
        raise HTTPException(status_code=401, detail="Token revoked")

    user = db.get(User, payload["sub"])
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found")

    # rotação: o refresh usado deixa de valer
    rt.revoked_at = datetime.now(timezone.utc)
    db.add(rt)
    return issue_tokens_for(db, user)

@router.post("/logout")
def logout(
    token: str | None = Body(default=None, embed=True, alias="refreshToken"),
    token_q: str | None = Query(default=None, alias="token"),
    db: Session = Depends(get_db),
):
    tok = _get_token_from_body_or_query(token, token_q)
    payload = decode_refresh(tok)
    if payload:
        rt = _active_refresh_row(db, payload)
        if rt is not None:
            rt.revoked_at = datetime.now(timezone.utc)
            db.add(rt); db.commit()
    return {"ok": True}

@router.get("/profile", response_model=UserOut)
def profile(user: User = Depends(get_current_user)):
    return user
