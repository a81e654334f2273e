import datetime as dt

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError, NotFoundError
from app.crud.attendance import attendance_crud
from app.models.attendance import Attendance
from app.schemas.attendance import AttendanceCreate, AttendanceUpdate
from conftest import DAY


def test_check_in_then_check_out(db, child, educator):
    att = attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="08:30:00", user_id=educator.id)
    assert att.status == "present"
    assert att.check_in_time == dt.time(8, 30)
    assert att.check_out_time is None
    assert att.center_id == child.center_id
    assert att.check_in_by_user_id == educator.id

    att = attendance_crud.check_out(db, child_id=child.id, day=DAY, check_out="16:30:00", notes="pegou a mãe", user_id=educator.id)
    assert att.status == "present"
    assert att.check_out_time == dt.time(16, 30)
    assert att.check_out_notes == "pegou a mãe"
    assert att.check_out_by_user_id == educator.id


def test_check_in_accepts_timestamps(db, child):
    att = attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="2025-09-19T07:45:12.500")
    assert att.check_in_time == dt.time(7, 45, 12)


def test_second_check_in_conflicts(db, child):
    attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="08:30")
    with pytest.raises(ConflictError) as exc:
        attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="09:00")
    assert exc.value.code == "ALREADY_CHECKED_IN"
    assert len(attendance_crud.list_active(db, day=DAY, child_id=child.id)) == 1


def test_check_in_fills_absent_record(db, child):
    absent = attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY))
    assert absent.status == "absent"

    att = attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="09:15")
    assert att.id == absent.id
    assert att.status == "present"


def test_check_out_without_check_in(db, child):
    with pytest.raises(NotFoundError) as exc:
        attendance_crud.check_out(db, child_id=child.id, day=DAY, check_out="16:00")
    assert exc.value.code == "NO_CHECKIN"

    attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY))
    with pytest.raises(NotFoundError):
        attendance_crud.check_out(db, child_id=child.id, day=DAY, check_out="16:00")


def test_double_check_out_conflicts(db, child):
    attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="08:00")
    attendance_crud.check_out(db, child_id=child.id, day=DAY, check_out="16:00")
    with pytest.raises(ConflictError) as exc:
        attendance_crud.check_out(db, child_id=child.id, day=DAY, check_out="17:00")
    assert exc.value.code == "ALREADY_CHECKED_OUT"
    att = attendance_crud.get_active_for_child(db, child_id=child.id, day=DAY)
    assert att.check_out_time == dt.time(16, 0)


def test_create_duplicate_conflicts(db, child):
    attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY, check_in="08:00"))
    with pytest.raises(ConflictError) as exc:
        attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY))
    assert exc.value.code == "ATTENDANCE_EXISTS"


def test_same_child_other_day_is_fine(db, child):
    attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY, check_in="08:00"))
    other = attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY + dt.timedelta(days=1)))
    assert other.date == DAY + dt.timedelta(days=1)


def test_unknown_child(db):
    with pytest.raises(NotFoundError) as exc:
        attendance_crud.check_in(db, child_id="missing", day=DAY, check_in="08:00")
    assert exc.value.code == "CHILD_NOT_FOUND"


def test_create_rejects_checkout_without_checkin(db, child):
    with pytest.raises(ConflictError) as exc:
        attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY, check_out="16:00"))
    assert exc.value.code == "CHECKOUT_WITHOUT_CHECKIN"
    assert attendance_crud.get_active_for_child(db, child_id=child.id, day=DAY) is None


def test_create_with_both_times(db, child):
    att = attendance_crud.create(
        db, AttendanceCreate(child_id=child.id, date=DAY, check_in="08:00", check_out="12:00", notes="meio período")
    )
    assert att.status == "present"
    assert att.check_in_notes == "meio período"


def test_soft_delete_frees_the_slot(db, child):
    first = attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="08:00")
    attendance_crud.remove(db, first.id)

    assert attendance_crud.get(db, first.id) is None
    assert attendance_crud.list_active(db, day=DAY) == []
    with pytest.raises(NotFoundError):
        attendance_crud.remove(db, first.id)

    second = attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="09:00")
    assert second.id != first.id
    # o registro removido continua no banco
    assert db.get(Attendance, first.id).is_active is False


def test_update_times_and_notes(db, child):
    att = attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY))
    att = attendance_crud.update(db, att, AttendanceUpdate(check_in="08:10", notes="chegou com febre"))
    assert att.status == "present"
    assert att.check_in_notes == "chegou com febre"

    att = attendance_crud.update(db, att, AttendanceUpdate(check_out="15:00", check_out_notes="saiu cedo"))
    assert att.check_out_time == dt.time(15, 0)
    assert att.check_out_notes == "saiu cedo"


def test_update_check_out_needs_check_in(db, child):
    att = attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY))
    with pytest.raises(ConflictError):
        attendance_crud.update(db, att, AttendanceUpdate(check_out="15:00"))
    db.refresh(att)
    assert att.check_out_time is None
    assert att.status == "absent"


def test_store_rejects_racing_insert(db, child, monkeypatch):
    attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="08:00")
    # simula a corrida: a checagem prévia não enxerga o registro concorrente
    monkeypatch.setattr(attendance_crud, "get_active_for_child", lambda *a, **kw: None)
    with pytest.raises(ConflictError) as exc:
        attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY, check_in="08:01"))
    assert exc.value.code == "ATTENDANCE_EXISTS"
    monkeypatch.undo()
    assert len(attendance_crud.list_active(db, day=DAY, child_id=child.id)) == 1


def test_racing_check_ins_on_absent_record(db, child, session_factory):
    attendance_crud.create(db, AttendanceCreate(child_id=child.id, date=DAY))
    first, second = session_factory(), session_factory()
    try:
        # as duas sessões enxergam o registro ainda sem check-in
        assert attendance_crud.get_active_for_child(first, child_id=child.id, day=DAY).check_in_time is None
        assert attendance_crud.get_active_for_child(second, child_id=child.id, day=DAY).check_in_time is None

        attendance_crud.check_in(first, child_id=child.id, day=DAY, check_in="08:00")
        with pytest.raises(ConflictError) as exc:
            attendance_crud.check_in(second, child_id=child.id, day=DAY, check_in="09:00")
        assert exc.value.code == "ALREADY_CHECKED_IN"
    finally:
        first.close(); second.close()

    db.expire_all()
    att = attendance_crud.get_active_for_child(db, child_id=child.id, day=DAY)
    assert att.check_in_time == dt.time(8, 0)
    assert att.status == "present"


def test_racing_check_outs(db, child, session_factory):
    attendance_crud.check_in(db, child_id=child.id, day=DAY, check_in="08:00")
    first, second = session_factory(), session_factory()
    try:
        assert attendance_crud.get_active_for_child(first, child_id=child.id, day=DAY).check_out_time is None
        assert attendance_crud.get_active_for_child(second, child_id=child.id, day=DAY).check_out_time is None

        attendance_crud.check_out(first, child_id=child.id, day=DAY, check_out="16:00", notes="avó buscou")
        with pytest.raises(ConflictError) as exc:
            attendance_crud.check_out(second, child_id=child.id, day=DAY, check_out="17:00", notes="pai buscou")
        assert exc.value.code == "ALREADY_CHECKED_OUT"
    finally:
        first.close(); second.close()

    db.expire_all()
    att = attendance_crud.get_active_for_child(db, child_id=child.id, day=DAY)
    assert att.check_out_time == dt.time(16, 0)
    assert att.check_out_notes == "avó buscou"


def test_unique_index_ignores_inactive_rows(db, child):
    db.add(Attendance(child_id=child.id, date=DAY, is_active=False))
    db.add(Attendance(child_id=child.id, date=DAY, is_active=False))
    db.add(Attendance(child_id=child.id, date=DAY, is_active=True))
    db.commit()

    db.add(Attendance(child_id=child.id, date=DAY, is_active=True))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_list_ordering_and_filters(db, make_child, classroom):
    ana = make_child("Ana", classroom)
    bia = make_child("Bia", classroom)
    caio = make_child("Caio")
    yesterday = DAY - dt.timedelta(days=1)

    attendance_crud.check_in(db, child_id=ana.id, day=DAY, check_in="09:00")
    attendance_crud.check_in(db, child_id=bia.id, day=DAY, check_in="07:30")
    attendance_crud.create(db, AttendanceCreate(child_id=caio.id, date=DAY))
    attendance_crud.check_in(db, child_id=ana.id, day=yesterday, check_in="08:00")

    rows = attendance_crud.list_active(db)
    assert [(r.date, r.child_id) for r in rows] == [
        (DAY, bia.id), (DAY, ana.id), (DAY, caio.id), (yesterday, ana.id),
    ]

    in_room = attendance_crud.list_active(db, day=DAY, classroom_id=classroom.id)
    assert {r.child_id for r in in_room} == {ana.id, bia.id}

    assert [r.date for r in attendance_crud.list_active(db, child_id=ana.id)] == [DAY, yesterday]
    assert attendance_crud.list_active(db, classroom_id="missing") == []
