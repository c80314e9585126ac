import logging.config
from pathlib import Path
from typing import Any, Dict

from app.core.config import settings

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _rotating_file(filename: str, level: str) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": "default",
        "filename": str(Path(settings.LOG_DIR) / filename),
        "maxBytes": MAX_LOG_BYTES,
        "backupCount": LOG_BACKUPS,
    }


def build_logging_config(level: str = None) -> Dict[str, Any]:
    """dictConfig for the API: console plus app.log and error.log under LOG_DIR."""
    level = level or settings.LOG_LEVEL
    app_handlers = ["console", "app_file", "error_file"]
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "app_file": _rotating_file("app.log", level),
            "error_file": _rotating_file("error.log", "ERROR"),
        },
        "root": {"level": level, "handlers": app_handlers},
        "loggers": {
            # services log enrollment, progress and certificate transitions
            "app": {"level": level, "handlers": app_handlers, "propagate": False},
            "sqlalchemy.engine": {"level": "WARNING", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging(level: str = None):
    Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(level))
