from __future__ import annotations
import datetime as dt
from typing import Annotated, List, Optional

from pydantic import BeforeValidator

from app.core.timeutils import normalize_time
from app.schemas.common import CamelModel


def _time(v):
    return normalize_time(v)

def _optional_time(v):
    if v is None or v == "":
        return None
    return normalize_time(v)

# horários chegam como "HH:MM:SS" ou timestamp e saem sempre "HH:MM:SS"
TimeStr = Annotated[str, BeforeValidator(_time)]
OptionalTimeStr = Annotated[Optional[str], BeforeValidator(_optional_time)]


# ---- entrada ----

class AttendanceCreate(CamelModel):
    child_id: str
    date: dt.date
    check_in: OptionalTimeStr = None
    check_out: OptionalTimeStr = None
    notes: Optional[str] = None


class AttendanceUpdate(CamelModel):
    check_in: OptionalTimeStr = None
    check_out: OptionalTimeStr = None
    notes: Optional[str] = None
    check_out_notes: Optional[str] = None


class CheckIn(CamelModel):
    child_id: str
    date: dt.date
    check_in: TimeStr
    notes: Optional[str] = None


class CheckOut(CamelModel):
    child_id: str
    date: dt.date
    check_out: TimeStr
    notes: Optional[str] = None


# ---- saída ----

class ChildRef(CamelModel):
    id: str
    first_name: str
    last_name: str
    classroom_id: Optional[str] = None


class AttendanceOut(CamelModel):
    id: str
    child_id: str
    date: dt.date
    check_in_time: Optional[dt.time] = None
    check_out_time: Optional[dt.time] = None
    status: str
    check_in_notes: Optional[str] = None
    check_out_notes: Optional[str] = None
    is_active: bool
    center_id: Optional[str] = None
    check_in_by_user_id: Optional[str] = None
    check_out_by_user_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    child: Optional[ChildRef] = None


# ---- relatórios ----

class Period(CamelModel):
    start_date: dt.date
    end_date: dt.date


class DailyStats(CamelModel):
    date: dt.date
    total_present: int
    total_checked_out: int
    still_present: int
    average_arrival_time: Optional[str] = None
    average_departure_time: Optional[str] = None
    attendance_rate: float


class DailyReport(CamelModel):
    stats: DailyStats
    records: List[AttendanceOut]


class DayBreakdown(CamelModel):
    date: dt.date
    present: int
    checked_out: int
    records: List[AttendanceOut]


class WeeklyReport(CamelModel):
    period: Period
    daily_breakdown: List[DayBreakdown]
    total_days: int
    total_attendances: int


class ChildReport(CamelModel):
    child_id: str
    period: Period
    total_days: int
    present_days: int
    absent_days: int
    attendance_rate: float
    records: List[AttendanceOut]


class AttendanceStats(CamelModel):
    date: dt.date
    total_records: int
    checked_in: int
    checked_out: int
    still_present: int
    absent: int
