"""
Roadfix Connect - Logging Configuration
Applied once by the API entry point; library modules only create loggers.
"""

import logging
import sys
from typing import Optional

from roadfix.core.config import Settings, settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

QUIET_LOGGERS = ("sqlalchemy.engine", "alembic.runtime.migration", "httpx")


def setup_logging(
    app_settings: Optional[Settings] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Attach a stdout handler to the ``roadfix`` logger hierarchy.

    Safe to call more than once: the previous handler is replaced, so
    repeated startups never duplicate log lines.

    Args:
        app_settings: Settings to read log_level from (defaults to global settings)
        level: Explicit level overriding the settings

    Returns:
        The configured ``roadfix`` logger
    """
    log_level = (level or (app_settings or settings).log_level).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.set_name("roadfix")

    logger = logging.getLogger("roadfix")
    for existing in [h for h in logger.handlers if h.get_name() == "roadfix"]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, log_level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
