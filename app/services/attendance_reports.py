# app/services/attendance_reports.py
"""Relatórios de presença (somente leitura).

Cada relatório lê um snapshot dos registros ativos e agrega em memória;
as funções ``summarize_*`` / ``breakdown_*`` são puras e testáveis sem banco.
"""
from __future__ import annotations

import datetime as dt
import logging
from collections import OrderedDict
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import InvalidInputError
from app.core.timeutils import average_time
from app.crud.child import child_crud
from app.crud.classroom import classroom_crud
from app.models.attendance import Attendance
from app.models.child import Child
from app.schemas.attendance import (
    AttendanceOut,
    AttendanceStats,
    ChildReport,
    DailyReport,
    DailyStats,
    DayBreakdown,
    Period,
    WeeklyReport,
)

logger = logging.getLogger(__name__)

# -------------------------- agregações puras --------------------------

def attendance_rate(present: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(present / total * 100, 2)


def count_checked_in(records: Iterable[Attendance]) -> int:
    return sum(1 for r in records if r.check_in_time)


def count_checked_out(records: Iterable[Attendance]) -> int:
    return sum(1 for r in records if r.check_out_time)


def count_still_present(records: Iterable[Attendance]) -> int:
    return sum(1 for r in records if r.check_in_time and not r.check_out_time)


def summarize_day(day: dt.date, records: Sequence[Attendance]) -> DailyStats:
    present = count_checked_in(records)
    return DailyStats(
        date=day,
        total_present=present,
        total_checked_out=count_checked_out(records),
        still_present=count_still_present(records),
        average_arrival_time=average_time(r.check_in_time for r in records),
        average_departure_time=average_time(r.check_out_time for r in records),
        attendance_rate=attendance_rate(present, len(records)),
    )


def breakdown_by_day(records: Iterable[Attendance]) -> List[DayBreakdown]:
    """Agrupa por data (ordem crescente); só aparecem dias com registros."""
    groups: "OrderedDict[dt.date, list[Attendance]]" = OrderedDict()
    for r in sorted(records, key=lambda a: a.date):
        groups.setdefault(r.date, []).append(r)
    return [
        DayBreakdown(
            date=day,
            present=count_checked_in(rows),
            checked_out=count_checked_out(rows),
            records=[AttendanceOut.model_validate(r) for r in rows],
        )
        for day, rows in groups.items()
    ]


def summarize_stats(day: dt.date, records: Sequence[Attendance]) -> AttendanceStats:
    checked_in = count_checked_in(records)
    return AttendanceStats(
        date=day,
        total_records=len(records),
        checked_in=checked_in,
        checked_out=count_checked_out(records),
        still_present=count_still_present(records),
        absent=len(records) - checked_in,
    )

# -------------------------- consultas --------------------------

def _check_period(start: dt.date, end: dt.date) -> None:
    if end < start:
        raise InvalidInputError("endDate must not be before startDate", code="INVALID_PERIOD")


def _active_records(
    db: Session,
    *,
    start: dt.date,
    end: dt.date,
    classroom_id: Optional[str] = None,
    child_id: Optional[str] = None,
) -> List[Attendance]:
    stmt = select(Attendance).where(
        Attendance.is_active.is_(True),
        Attendance.date.between(start, end),
    )
    if classroom_id:
        classroom_crud.get_or_404(db, classroom_id)
        stmt = stmt.join(Child, Child.id == Attendance.child_id).where(Child.classroom_id == classroom_id)
    if child_id:
        stmt = stmt.where(Attendance.child_id == child_id)
    stmt = stmt.order_by(Attendance.date.asc(), Attendance.check_in_time.asc().nulls_last())
    rows = list(db.scalars(stmt).all())
    logger.debug("report scan %s..%s classroom=%s child=%s -> %d rows", start, end, classroom_id, child_id, len(rows))
    return rows


def daily_report(db: Session, day: dt.date, classroom_id: Optional[str] = None) -> DailyReport:
    records = _active_records(db, start=day, end=day, classroom_id=classroom_id)
    return DailyReport(
        stats=summarize_day(day, records),
        records=[AttendanceOut.model_validate(r) for r in records],
    )


def weekly_report(
    db: Session,
    start: dt.date,
    end: dt.date,
    classroom_id: Optional[str] = None,
) -> WeeklyReport:
    _check_period(start, end)
    records = _active_records(db, start=start, end=end, classroom_id=classroom_id)
    breakdown = breakdown_by_day(records)
    return WeeklyReport(
        period=Period(start_date=start, end_date=end),
        daily_breakdown=breakdown,
        total_days=len(breakdown),
        total_attendances=count_checked_in(records),
    )


def child_report(db: Session, child_id: str, start: dt.date, end: dt.date) -> ChildReport:
    _check_period(start, end)
    child_crud.get_or_404(db, child_id)
    records = _active_records(db, start=start, end=end, child_id=child_id)
    total = len(records)
    present = count_checked_in(records)
    return ChildReport(
        child_id=child_id,
        period=Period(start_date=start, end_date=end),
        total_days=total,
        present_days=present,
        absent_days=total - present,
        attendance_rate=attendance_rate(present, total),
        records=[AttendanceOut.model_validate(r) for r in records],
    )


def daily_stats(db: Session, day: dt.date) -> AttendanceStats:
    return summarize_stats(day, _active_records(db, start=day, end=day))
