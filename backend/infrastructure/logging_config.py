"""Basic logging configuration (minimal)."""

import logging

from infrastructure.config import get_log_level

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    """
    Configure root logging from LOG_LEVEL.

    Unknown level names fall back to INFO. Safe to call more than once:
    ``basicConfig`` is a no-op when handlers already exist.
    """
    level = getattr(logging, get_log_level(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # Package loggers follow the configured level unless set explicitly
    for name in ("domain", "application", "infrastructure"):
        package_logger = logging.getLogger(name)
        if package_logger.level == logging.NOTSET:
            package_logger.setLevel(level)
