import os

# antes de importar app.*: settings leem o ambiente na importação
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS_ON_STARTUP"] = "false"
os.environ["TIMEZONE"] = "UTC"

import datetime as dt
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.tokens import create_access_token
from app.crud.user import user_crud
from app.db.base import Base
from app.db.session import get_db
from app.main import api
from app.models.center import Center
from app.models.child import Child
from app.models.classroom import Classroom
from app.schemas.user import UserCreate

DAY = dt.date(2025, 9, 19)
PASSWORD = "secret-pass-123"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    api.dependency_overrides[get_db] = _get_db
    yield TestClient(api)
    api.dependency_overrides.clear()


# ---------------- dados ----------------

@pytest.fixture()
def center(db):
    c = Center(name="Centro Sol", address="Rua A, 10")
    db.add(c); db.commit(); db.refresh(c)
    return c


@pytest.fixture()
def classroom(db, center):
    room = Classroom(name="Pollitos", age_group_min=1, age_group_max=2, capacity=12, center_id=center.id)
    db.add(room); db.commit(); db.refresh(room)
    return room


@pytest.fixture()
def make_child(db, center):
    def _make(first_name: str = "Ana", classroom: Optional[Classroom] = None) -> Child:
        kid = Child(
            first_name=first_name,
            last_name="Silva",
            birth_date=dt.date(2022, 3, 1),
            center_id=center.id,
            classroom_id=classroom.id if classroom else None,
        )
        db.add(kid); db.commit(); db.refresh(kid)
        return kid
    return _make


@pytest.fixture()
def child(make_child, classroom):
    return make_child("Ana", classroom)


@pytest.fixture()
def make_user(db):
    def _make(role: str, email: Optional[str] = None):
        return user_crud.create(db, UserCreate(
            email=email or f"{role}@daycare.com",
            first_name=role.title(),
            last_name="Tester",
            role=role,
            password=PASSWORD,
        ))
    return _make


def auth_header(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(sub=user.id, role=user.role)}"}


@pytest.fixture()
def educator(make_user):
    return make_user("educator")


@pytest.fixture()
def educator_headers(educator):
    return auth_header(educator)


@pytest.fixture()
def admin_headers(make_user):
    return auth_header(make_user("admin"))


@pytest.fixture()
def family_headers(make_user):
    return auth_header(make_user("family"))
