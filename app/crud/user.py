from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.core.errors import ConflictError
from app.core.security_password import hash_password
from app.crud.base import CRUDBase
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    not_found_message = "User not found"

    def get_by_email(self, db: Session, email: str) -> User | None:
        return db.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()

    def list_active(self, db: Session) -> List[User]:
        stmt = select(User).where(User.is_active.is_(True)).order_by(User.created_at.desc())
        return list(db.scalars(stmt).all())

    def create(self, db: Session, obj_in: UserCreate, extra=None) -> User:
        if self.get_by_email(db, obj_in.email):
            raise ConflictError("E-mail already registered", code="EMAIL_TAKEN")
        data = obj_in.model_dump()
        data["email"] = normalize_email(data["email"])
        data["hashed_password"] = hash_password(data.pop("password"))
        if extra: data.update(extra)
        user = User(**data)
        db.add(user); db.commit(); db.refresh(user)
        return user

    def update(self, db: Session, db_obj: User, obj_in: UserUpdate | dict) -> User:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        if data.get("password"):
            data["hashed_password"] = hash_password(data.pop("password"))
        else:
            data.pop("password", None)
        return super().update(db, db_obj, data)

user_crud = CRUDUser(User)
