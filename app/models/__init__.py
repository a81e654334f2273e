# Carrega módulos para registrar tabelas no metadata:
import app.models.center        # noqa: F401
import app.models.classroom     # noqa: F401
import app.models.child         # noqa: F401
import app.models.user          # noqa: F401
import app.models.attendance    # noqa: F401
import app.models.tokens        # noqa: F401

__all__: list[str] = []
