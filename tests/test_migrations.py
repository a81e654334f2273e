import os

from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, inspect, select
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.db.init_db import init_db
from app import main
from app.models.center import Center
from app.models.user import User

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def test_upgrade_and_seed(tmp_path):
    url = f"sqlite:///{tmp_path / 'daycare.db'}"
    cfg = Config(os.path.join(ROOT, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(ROOT, "migrations"))
    cfg.set_main_option("sqlalchemy.url", url)
    command.upgrade(cfg, "head")

    engine = create_engine(url)
    insp = inspect(engine)
    assert {"centers", "classrooms", "children", "users", "attendances", "refresh_tokens"} <= set(insp.get_table_names())
    unique = [ix for ix in insp.get_indexes("attendances") if ix["name"] == "uq_attendance_active_child_date"]
    assert unique and unique[0]["unique"]
    assert unique[0]["column_names"] == ["child_id", "date"]

    Session = sessionmaker(bind=engine)
    with Session() as db:
        init_db(db)
        init_db(db)
        assert db.scalar(select(func.count()).select_from(User)) == 1
        assert db.scalar(select(func.count()).select_from(Center)) == 1
        admin = db.scalar(select(User))
        assert admin.email == settings.ADMIN_EMAIL
        assert admin.role == "admin"
    engine.dispose()


def test_lifespan_runs_bootstrap_only_when_enabled(monkeypatch):
    calls = []
    monkeypatch.setattr(main, "run_migrations_and_seed", lambda: calls.append("ran"))

    monkeypatch.setattr(settings, "RUN_MIGRATIONS_ON_STARTUP", False)
    with TestClient(main.api) as client:
        assert client.get("/healthz").status_code == 200
    assert calls == []

    monkeypatch.setattr(settings, "RUN_MIGRATIONS_ON_STARTUP", True)
    with TestClient(main.api):
        pass
    assert calls == ["ran"]
