from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.center import Center
from app.schemas.center import CenterCreate, CenterUpdate

class CRUDCenter(CRUDBase[Center, CenterCreate, CenterUpdate]):
    not_found_message = "Center not found"

    def search(
        self,
        db: Session,
        *,
        q: Optional[str] = None,
        is_active: Optional[bool] = True,
        page: int = 1,
        limit: int = 10,
    ) -> List[Center]:
        stmt = select(Center)
        if is_active is not None:
            stmt = stmt.where(Center.is_active.is_(is_active))
        if q:
            stmt = stmt.where(Center.name.ilike(f"%{q.strip()}%"))
        stmt = stmt.order_by(Center.created_at.desc(), Center.name).offset((page - 1) * limit).limit(limit)
        return list(db.scalars(stmt).all())

center_crud = CRUDCenter(Center)
