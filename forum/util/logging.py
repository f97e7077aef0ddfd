"""Logging configuration for the application."""

import logging
import sys

from forum.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure process logging.

    Logfire handles application events; this sets up the stdlib root logger
    for uvicorn, alembic and anything else that logs the classic way.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # SQL statements are traced by logfire; the engine echo is enough in debug
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)

    logging.getLogger("forum").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )
