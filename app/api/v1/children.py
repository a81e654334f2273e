# app/api/v1/children.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.core.rbac import require_min_role, ROLE_EDUCATOR
from app.crud.child import child_crud
from app.schemas.child import Child, ChildCreate, ChildUpdate

router = APIRouter()

@router.get("/", response_model=List[Child])
def list_children(
    classroom_id: Optional[str] = Query(None, alias="classroomId"),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return child_crud.list_active(db, classroom_id=classroom_id)

@router.post("/", response_model=Child, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_min_role(ROLE_EDUCATOR))])
def create_child(body: ChildCreate, db: Session = Depends(get_db)):
    return child_crud.create(db, body)

@router.get("/{child_id}", response_model=Child)
def get_child(
    child_id: str = Path(...),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return child_crud.get_or_404(db, child_id)

@router.patch("/{child_id}", response_model=Child,
              dependencies=[Depends(require_min_role(ROLE_EDUCATOR))])
def update_child(child_id: str, body: ChildUpdate, db: Session = Depends(get_db)):
    child = child_crud.get_or_404(db, child_id)
    return child_crud.update(db, child, body)

@router.delete("/{child_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_min_role(ROLE_EDUCATOR))])
def delete_child(child_id: str, db: Session = Depends(get_db)):
    child_crud.remove(db, child_id)
