from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.crud.center import center_crud
from app.models.classroom import Classroom
from app.schemas.classroom import ClassroomCreate, ClassroomUpdate

class CRUDClassroom(CRUDBase[Classroom, ClassroomCreate, ClassroomUpdate]):
    not_found_message = "Classroom not found"

    def list_active(self, db: Session, *, center_id: Optional[str] = None) -> List[Classroom]:
        stmt = select(Classroom).where(Classroom.is_active.is_(True))
        if center_id:
            stmt = stmt.where(Classroom.center_id == center_id)
        return list(db.scalars(stmt.order_by(Classroom.created_at.desc())).all())

    def create(self, db: Session, obj_in: ClassroomCreate, extra=None) -> Classroom:
        center_crud.get_or_404(db, obj_in.center_id)
        return super().create(db, obj_in, extra)

    def update(self, db: Session, db_obj: Classroom, obj_in: ClassroomUpdate | dict) -> Classroom:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        if data.get("center_id"):
            center_crud.get_or_404(db, data["center_id"])
        return super().update(db, db_obj, data)

classroom_crud = CRUDClassroom(Classroom)
