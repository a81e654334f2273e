import datetime as dt
from enum import Enum
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import ForeignKey, Index, String, Text, Boolean, Date, Time, DateTime, func, text, true
from app.db.base_class import Base, new_uuid

class AttendanceStatus(str, Enum):
    present = "present"
    absent = "absent"

class Attendance(Base):
    __tablename__ = "attendances"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    child_id: Mapped[str] = mapped_column(ForeignKey("children.id"), index=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    check_in_time: Mapped[Optional[dt.time]] = mapped_column(Time, nullable=True)
    check_out_time: Mapped[Optional[dt.time]] = mapped_column(Time, nullable=True)
    # cache de "check_in_time is not None"; recalculado em toda escrita
    status: Mapped[str] = mapped_column(String(20), default=AttendanceStatus.absent.value)
    check_in_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    check_out_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true())
    center_id: Mapped[Optional[str]] = mapped_column(ForeignKey("centers.id"), nullable=True)
    check_in_by_user_id: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id"), nullable=True)
    check_out_by_user_id: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    child = relationship("Child", lazy="joined")

    # no máximo um registro ATIVO por criança/dia
    __table_args__ = (
        Index(
            "uq_attendance_active_child_date",
            "child_id", "date",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )
