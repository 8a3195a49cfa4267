"""Logging configuration for the application.

Application code logs through logfire; this only sets up the stdlib
loggers that uvicorn, SQLAlchemy and asyncpg write to.
"""

import logging
import sys

from portal.config import Settings

# Libraries that are chatty at INFO
_QUIET_LOGGERS = ("asyncpg", "sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the current environment.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("portal").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
