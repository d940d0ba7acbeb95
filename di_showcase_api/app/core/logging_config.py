"""
Logging configuration for the application.

Every logger of the project lives below ``di_showcase_api``: module
loggers (``logging.getLogger(__name__)``) and the category loggers
``di_showcase_api.<category>`` written to by ``LoggingService``.
``setup_logging`` attaches the handlers to that package logger only,
so uvicorn and third‑party libraries keep their own configuration.
"""

import logging
from pathlib import Path
from typing import List, Optional


PACKAGE_LOGGER = "di_showcase_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def category_logger(category: str) -> logging.Logger:
    """Return the logger for a ``LoggingService`` category, e.g. ``email``."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{category}")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the ``di_showcase_api`` logger.

    The level is applied on every call; handlers are attached only once,
    even when ``create_app`` is called repeatedly (as in tests).

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to, in addition to the console.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if package_logger.handlers:
        return

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
