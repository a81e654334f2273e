# app/db/base.py
# Base + todos os models registrados no metadata (usado por Alembic e testes)
from app.db.base_class import Base  # noqa: F401

from app.models.center import Center  # noqa: F401
from app.models.classroom import Classroom  # noqa: F401
from app.models.child import Child  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.attendance import Attendance  # noqa: F401
from app.models.tokens import RefreshToken  # noqa: F401
