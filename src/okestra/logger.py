import logging
import os

from rich.logging import RichHandler

LOG_LEVEL_ENV = "OKESTRA_LOG_LEVEL"


def _level_from_env(default: int) -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logger(name: str = "okestra", level: int | None = None) -> logging.Logger:
    """Configures and returns a logger with RichHandler."""

    if level is None:
        level = _level_from_env(logging.WARNING)

    logger = logging.getLogger(name)

    # Repeated setup only adjusts the level
    if not logger.handlers:
        handler = RichHandler(rich_tracebacks=True, markup=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


logger = setup_logger()
