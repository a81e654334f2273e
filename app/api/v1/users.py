# app/api/v1/users.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.rbac import require_roles, ROLE_ADMIN
from app.crud.user import user_crud
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate, UserOut, RoleName

router = APIRouter(dependencies=[Depends(require_roles(ROLE_ADMIN))])

@router.post("/", response_model=UserOut, status_code=201)
def create_user(body: UserCreate, db: Session = Depends(get_db)):
    return user_crud.create(db, body)

@router.get("/", response_model=List[UserOut])
def list_users(
    role: Optional[RoleName] = Query(None),
    q: Optional[str] = Query(None, description="filtra por nome/email"),
    db: Session = Depends(get_db),
):
    stmt = select(User).where(User.is_active.is_(True))
    if role:
        stmt = stmt.where(User.role == role)
    if q:
        like = f"%{q.strip().lower()}%"
        stmt = stmt.where(
            (User.first_name.ilike(like)) | (User.last_name.ilike(like)) | (User.email.ilike(like))
        )
    return db.scalars(stmt.order_by(User.created_at.desc())).all()

@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str = Path(...), db: Session = Depends(get_db)):
    return user_crud.get_or_404(db, user_id)

@router.patch("/{user_id}", response_model=UserOut)
def update_user(user_id: str, body: UserUpdate, db: Session = Depends(get_db)):
    u = user_crud.get_or_404(db, user_id)
    return user_crud.update(db, u, body)

@router.delete("/{user_id}", status_code=204)
def deactivate_user(user_id: str, db: Session = Depends(get_db)):
    user_crud.remove(db, user_id)
