"""
Logging helpers.

Every module gets its logger through get_logger(__name__) so that all
records live under the "winbooks" hierarchy.
"""
import logging
from typing import Optional, Union

ROOT_LOGGER = "winbooks"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root logger."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Attach a stream handler to the package root logger.

    Safe to call more than once: the handler is only added the first time.

    Args:
        level: Logging level; defaults to the configured log_level setting

    Returns:
        The package root logger
    """
    if level is None:
        from winbooks.config import get_settings
        level = get_settings().log_level
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)

    if not any(h.get_name() == ROOT_LOGGER for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler.set_name(ROOT_LOGGER)
        root.addHandler(handler)

    return root
