# app/api/v1/centers.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.core.rbac import require_roles, ROLE_ADMIN
from app.crud.center import center_crud
from app.schemas.center import Center, CenterCreate, CenterUpdate

router = APIRouter()

@router.get("/", response_model=List[Center])
def list_centers(
    search: Optional[str] = Query(None, description="Busca por nome"),
    is_active: Optional[bool] = Query(True, alias="isActive"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=200),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return center_crud.search(db, q=search, is_active=is_active, page=page, limit=limit)

@router.post("/", response_model=Center, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_roles(ROLE_ADMIN))])
def create_center(body: CenterCreate, db: Session = Depends(get_db)):
    return center_crud.create(db, body)

@router.get("/{center_id}", response_model=Center)
def get_center(
    center_id: str = Path(...),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return center_crud.get_or_404(db, center_id)

@router.patch("/{center_id}", response_model=Center,
              dependencies=[Depends(require_roles(ROLE_ADMIN))])
def update_center(center_id: str, body: CenterUpdate, db: Session = Depends(get_db)):
    c = center_crud.get_or_404(db, center_id)
    return center_crud.update(db, c, body)

@router.delete("/{center_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_roles(ROLE_ADMIN))])
def delete_center(center_id: str, db: Session = Depends(get_db)):
    center_crud.remove(db, center_id)
