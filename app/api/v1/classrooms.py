# app/api/v1/classrooms.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.core.rbac import require_roles, ROLE_ADMIN
from app.crud.classroom import classroom_crud
from app.schemas.classroom import Classroom, ClassroomCreate, ClassroomUpdate

router = APIRouter()

@router.get("/", response_model=List[Classroom])
def list_classrooms(
    center_id: Optional[str] = Query(None, alias="centerId"),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return classroom_crud.list_active(db, center_id=center_id)

@router.post("/", response_model=Classroom, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_roles(ROLE_ADMIN))])
def create_classroom(body: ClassroomCreate, db: Session = Depends(get_db)):
    return classroom_crud.create(db, body)

@router.get("/{classroom_id}", response_model=Classroom)
def get_classroom(
    classroom_id: str = Path(...),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return classroom_crud.get_or_404(db, classroom_id)

@router.patch("/{classroom_id}", response_model=Classroom,
              dependencies=[Depends(require_roles(ROLE_ADMIN))])
def update_classroom(classroom_id: str, body: ClassroomUpdate, db: Session = Depends(get_db)):
    room = classroom_crud.get_or_404(db, classroom_id)
    return classroom_crud.update(db, room, body)

@router.delete("/{classroom_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_roles(ROLE_ADMIN))])
def delete_classroom(classroom_id: str, db: Session = Depends(get_db)):
    classroom_crud.remove(db, classroom_id)
