# app/core/logging.py
import logging
import logging.config
from typing import Optional

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging(level: Optional[str] = None) -> None:
    lvl = (level or settings.LOG_LEVEL or "INFO").upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {"handlers": ["console"], "level": lvl},
        "loggers": {
            # SQL só em DEBUG explícito
            "sqlalchemy.engine": {"level": "WARNING"},
            "uvicorn.access": {"level": lvl},
        },
    })
    logging.getLogger(__name__).debug("logging configured at %s", lvl)
