"""Logging setup for the API process."""

import logging

from showplanner.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name (uses settings if not provided)
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
