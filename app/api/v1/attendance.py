# app/api/v1/attendance.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.core.rbac import require_min_role, ROLE_EDUCATOR
from app.crud.attendance import attendance_crud
from app.services import attendance_reports as reports
from app.schemas.attendance import (
    AttendanceCreate,
    AttendanceOut,
    AttendanceStats,
    AttendanceUpdate,
    CheckIn,
    CheckOut,
    ChildReport,
    DailyReport,
    WeeklyReport,
)

router = APIRouter()

# POST /attendance (aceita com e sem barra final)
@router.post("", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
def create_attendance(
    body: AttendanceCreate,
    db: Session = Depends(get_db),
    user = Depends(require_min_role(ROLE_EDUCATOR)),
):
    return attendance_crud.create(db, body, user_id=user.id)

# GET /attendance?date=..&childId=..&classroomId=..
@router.get("", response_model=List[AttendanceOut], include_in_schema=False)
@router.get("/", response_model=List[AttendanceOut])
def list_attendance(
    date: Optional[dt.date] = Query(None, description="Filtrar por data (YYYY-MM-DD)"),
    child_id: Optional[str] = Query(None, alias="childId"),
    classroom_id: Optional[str] = Query(None, alias="classroomId"),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return attendance_crud.list_active(db, day=date, child_id=child_id, classroom_id=classroom_id)

@router.post("/check-in", response_model=AttendanceOut)
def check_in(
    body: CheckIn = Body(...),
    db: Session = Depends(get_db),
    user = Depends(require_min_role(ROLE_EDUCATOR)),
):
    return attendance_crud.check_in(
        db,
        child_id=body.child_id,
        day=body.date,
        check_in=body.check_in,
        notes=body.notes,
        user_id=user.id,
    )

@router.patch("/check-out", response_model=AttendanceOut)
def check_out(
    body: CheckOut = Body(...),
    db: Session = Depends(get_db),
    user = Depends(require_min_role(ROLE_EDUCATOR)),
):
    return attendance_crud.check_out(
        db,
        child_id=body.child_id,
        day=body.date,
        check_out=body.check_out,
        notes=body.notes,
        user_id=user.id,
    )

# ---------------- relatórios ----------------

@router.get("/reports/daily", response_model=DailyReport)
def daily_report(
    date: dt.date = Query(..., description="Data do relatório (YYYY-MM-DD)"),
    classroom_id: Optional[str] = Query(None, alias="classroomId"),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return reports.daily_report(db, date, classroom_id)

@router.get("/reports/weekly", response_model=WeeklyReport)
def weekly_report(
    start_date: dt.date = Query(..., alias="startDate"),
    end_date: dt.date = Query(..., alias="endDate"),
    classroom_id: Optional[str] = Query(None, alias="classroomId"),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return reports.weekly_report(db, start_date, end_date, classroom_id)

@router.get("/reports/child/{child_id}", response_model=ChildReport)
def child_report(
    child_id: str = Path(...),
    start_date: dt.date = Query(..., alias="startDate"),
    end_date: dt.date = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return reports.child_report(db, child_id, start_date, end_date)

@router.get("/stats", response_model=AttendanceStats)
def stats(
    date: dt.date = Query(...),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return reports.daily_stats(db, date)

# ---------------- por id (depois das rotas fixas) ----------------

@router.get("/{attendance_id}", response_model=AttendanceOut)
def get_attendance(
    attendance_id: str = Path(...),
    db: Session = Depends(get_db),
    _ = Depends(get_current_user),
):
    return attendance_crud.get_or_404(db, attendance_id)

@router.patch("/{attendance_id}", response_model=AttendanceOut)
def update_attendance(
    attendance_id: str = Path(...),
    body: AttendanceUpdate = Body(...),
    db: Session = Depends(get_db),
    _ = Depends(require_min_role(ROLE_EDUCATOR)),
):
    att = attendance_crud.get_or_404(db, attendance_id)
    return attendance_crud.update(db, att, body)

@router.delete("/{attendance_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_attendance(
    attendance_id: str = Path(...),
    db: Session = Depends(get_db),
    _ = Depends(require_min_role(ROLE_EDUCATOR)),
):
    attendance_crud.remove(db, attendance_id)
