import datetime as dt
import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.core.timeutils import TimeLike, parse_time
from app.crud.base import CRUDBase
from app.models.attendance import Attendance, AttendanceStatus
from app.models.child import Child
from app.schemas.attendance import AttendanceCreate, AttendanceUpdate

logger = logging.getLogger(__name__)


def _sync_status(att: Attendance) -> None:
    att.status = (AttendanceStatus.present if att.check_in_time else AttendanceStatus.absent).value


def _opt_time(value: Optional[TimeLike]) -> Optional[dt.time]:
    return parse_time(value) if value else None


class CRUDAttendance(CRUDBase[Attendance, AttendanceCreate, AttendanceUpdate]):
    not_found_message = "Attendance record not found"

    # ---------------- leitura ----------------

    def get_active_for_child(self, db: Session, *, child_id: str, day: dt.date) -> Optional[Attendance]:
        return db.execute(
            select(Attendance).where(
                Attendance.child_id == child_id,
                Attendance.date == day,
                Attendance.is_active.is_(True),
            )
        ).scalar_one_or_none()

    def list_active(
        self,
        db: Session,
        *,
        day: Optional[dt.date] = None,
        child_id: Optional[str] = None,
        classroom_id: Optional[str] = None,
    ) -> List[Attendance]:
        stmt = select(Attendance).where(Attendance.is_active.is_(True))
        if day is not None:
            stmt = stmt.where(Attendance.date == day)
        if child_id:
            stmt = stmt.where(Attendance.child_id == child_id)
        if classroom_id:
            stmt = stmt.join(Child, Child.id == Attendance.child_id).where(Child.classroom_id == classroom_id)
        stmt = stmt.order_by(Attendance.date.desc(), Attendance.check_in_time.asc().nulls_last())
        return list(db.scalars(stmt).all())

    # ---------------- escrita ----------------

    def _require_child(self, db: Session, child_id: str) -> Child:
        child = db.get(Child, child_id)
        if not child or not child.is_active:
            raise NotFoundError("Child not found", code="CHILD_NOT_FOUND")
        return child

    def _save(self, db: Session, att: Attendance) -> Attendance:
        # o índice único parcial decide quem vence uma corrida de inserts
        db.add(att)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            logger.info("duplicate attendance rejected by store child=%s date=%s", att.child_id, att.date)
            raise ConflictError(
                "An attendance record already exists for this child on this date",
                code="ATTENDANCE_EXISTS",
            ) from exc
        db.refresh(att)
        return att

    def _write_if_unset(self, db: Session, att: Attendance, column, values: dict) -> bool:
        """UPDATE condicionado a ``column IS NULL`` no banco, não na cópia em memória.

        Duas sessões que leram o mesmo registro não conseguem gravar as duas:
        a segunda não encontra linha e recebe ``False``.
        """
        result = db.execute(
            update(Attendance)
            .where(
                Attendance.id == att.id,
                Attendance.is_active.is_(True),
                column.is_(None),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            db.rollback()
            logger.info("stale write rejected on attendance %s (%s already set)", att.id, column.key)
            return False
        db.commit()
        db.refresh(att)
        return True

    def create(
        self,
        db: Session,
        obj_in: AttendanceCreate,
        *,
        user_id: Optional[str] = None,
    ) -> Attendance:
        child = self._require_child(db, obj_in.child_id)
        if self.get_active_for_child(db, child_id=child.id, day=obj_in.date) is not None:
            raise ConflictError(
                "An attendance record already exists for this child on this date",
                code="ATTENDANCE_EXISTS",
            )

        check_in = _opt_time(obj_in.check_in)
        check_out = _opt_time(obj_in.check_out)
        if check_out and not check_in:
            raise ConflictError("Cannot check out before checking in", code="CHECKOUT_WITHOUT_CHECKIN")

        att = Attendance(
            child_id=child.id,
            date=obj_in.date,
            check_in_time=check_in,
            check_out_time=check_out,
            check_in_notes=obj_in.notes or None,
            center_id=child.center_id,
            check_in_by_user_id=user_id if check_in else None,
            check_out_by_user_id=user_id if check_out else None,
            is_active=True,
        )
        _sync_status(att)
        att = self._save(db, att)
        logger.info("attendance %s created child=%s date=%s status=%s", att.id, att.child_id, att.date, att.status)
        return att

    def check_in(
        self,
        db: Session,
        *,
        child_id: str,
        day: dt.date,
        check_in: TimeLike,
        notes: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Attendance:
        att = self.get_active_for_child(db, child_id=child_id, day=day)
        if att is None:
            return self.create(
                db,
                AttendanceCreate(child_id=child_id, date=day, check_in=check_in, notes=notes),
                user_id=user_id,
            )

        if att.check_in_time:
            raise ConflictError("Child is already checked in for this date", code="ALREADY_CHECKED_IN")

        values = {
            "check_in_time": parse_time(check_in),
            "check_in_by_user_id": user_id,
            "status": AttendanceStatus.present.value,
        }
        if notes:
            values["check_in_notes"] = notes
        if not self._write_if_unset(db, att, Attendance.check_in_time, values):
            raise ConflictError("Child is already checked in for this date", code="ALREADY_CHECKED_IN")
        logger.info("attendance %s checked in at %s", att.id, att.check_in_time)
        return att

    def check_out(
        self,
        db: Session,
        *,
        child_id: str,
        day: dt.date,
        check_out: TimeLike,
        notes: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Attendance:
        att = self.get_active_for_child(db, child_id=child_id, day=day)
        if att is None or not att.check_in_time:
            raise NotFoundError("No check-in found for this child on this date", code="NO_CHECKIN")
        if att.check_out_time:
            raise ConflictError("Child is already checked out", code="ALREADY_CHECKED_OUT")

        values = {
            "check_out_time": parse_time(check_out),
            "check_out_by_user_id": user_id,
        }
        if notes:
            values["check_out_notes"] = notes
        if not self._write_if_unset(db, att, Attendance.check_out_time, values):
            raise ConflictError("Child is already checked out", code="ALREADY_CHECKED_OUT")
        logger.info("attendance %s checked out at %s", att.id, att.check_out_time)
        return att

    def update(self, db: Session, db_obj: Attendance, obj_in: AttendanceUpdate | dict) -> Attendance:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)

        check_in = _opt_time(data.get("check_in"))
        check_out = _opt_time(data.get("check_out"))
        if check_out and not (check_in or db_obj.check_in_time):
            raise ConflictError("Cannot check out before checking in", code="CHECKOUT_WITHOUT_CHECKIN")

        if check_in:
            db_obj.check_in_time = check_in
        if check_out:
            db_obj.check_out_time = check_out
        if data.get("notes") is not None:
            db_obj.check_in_notes = data["notes"]
        if data.get("check_out_notes") is not None:
            db_obj.check_out_notes = data["check_out_notes"]

        _sync_status(db_obj)
        return self._save(db, db_obj)

    def remove(self, db: Session, id) -> Attendance:
        att = super().remove(db, id)
        logger.info("attendance %s soft-deleted", att.id)
        return att


attendance_crud = CRUDAttendance(Attendance)
