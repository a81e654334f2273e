# app/db/init_db.py
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.rbac import ROLE_ADMIN
from app.core.security_password import hash_password
from app.models.center import Center
from app.models.user import User

logger = logging.getLogger(__name__)

DEMO_CENTER_NAME = "Centro Demo"

def init_db(db: Session) -> None:
    center = db.scalar(select(Center).where(Center.name == DEMO_CENTER_NAME))
    if not center:
        center = Center(name=DEMO_CENTER_NAME, address="Rua Demo, 1")
        db.add(center); db.flush()
        logger.info("seeded demo center %s", center.id)

    email = settings.ADMIN_EMAIL.strip().lower()
    admin = db.scalar(select(User).where(User.email == email))
    if not admin:
        admin = User(
            email=email,
            first_name="Admin",
            last_name="DayCare",
            role=ROLE_ADMIN,
            center_id=center.id,
            hashed_password=hash_password(settings.ADMIN_PASSWORD),
        )
        db.add(admin); db.flush()
        logger.info("seeded admin user %s", email)

    db.commit()
