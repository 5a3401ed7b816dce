# app/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from typing import Optional

from app.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"

# Loggers that drown out booking activity at INFO
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic",
    "passlib",
    "uvicorn.access",
)


class CorrelationIdFilter(logging.Filter):
    """Guarantees every record has a correlation_id for the formatter.

    Request logs set it through `extra`; everything else gets "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True


def resolve_level(name: Optional[str]) -> int:
    level = logging.getLevelName((name or "").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(verbose=True):
    """Configure application logging

    verbose=False is for CLI scripts: warnings only, third-party loggers muted.
    """
    settings = get_settings()
    level = resolve_level(settings.LOG_LEVEL) if verbose else logging.WARNING

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=level, handlers=[handler], force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING if verbose else logging.ERROR)
