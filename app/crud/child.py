from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.crud.center import center_crud
from app.crud.classroom import classroom_crud
from app.models.child import Child
from app.schemas.child import ChildCreate, ChildUpdate

class CRUDChild(CRUDBase[Child, ChildCreate, ChildUpdate]):
    not_found_message = "Child not found"

    def list_active(self, db: Session, *, classroom_id: Optional[str] = None) -> List[Child]:
        stmt = select(Child).where(Child.is_active.is_(True))
        if classroom_id:
            stmt = stmt.where(Child.classroom_id == classroom_id)
        return list(db.scalars(stmt.order_by(Child.created_at.desc())).all())

    def _resolve_refs(self, db: Session, data: Dict[str, Any]) -> None:
        # sala define o centro quando o centro não foi informado
        if data.get("classroom_id"):
            room = classroom_crud.get_or_404(db, data["classroom_id"])
            if not data.get("center_id"):
                data["center_id"] = room.center_id
        if data.get("center_id"):
            center_crud.get_or_404(db, data["center_id"])

    def create(self, db: Session, obj_in: ChildCreate, extra=None) -> Child:
        data = obj_in.model_dump()
        self._resolve_refs(db, data)
        if extra: data.update(extra)
        obj = Child(**data)
        db.add(obj); db.commit(); db.refresh(obj)
        return obj

    def update(self, db: Session, db_obj: Child, obj_in: ChildUpdate | dict) -> Child:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        self._resolve_refs(db, data)
        return super().update(db, db_obj, data)

child_crud = CRUDChild(Child)
