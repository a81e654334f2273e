from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, func, true
from app.db.base_class import Base, new_uuid


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String(160), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(80), nullable=False)
    last_name = Column(String(80), nullable=False)
    # admin | educator | family
    role = Column(String(20), nullable=False, default="family")
    center_id = Column(String(36), ForeignKey("centers.id"), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
