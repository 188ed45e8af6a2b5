from loguru import logger
import sys
import os
from typing import List, Optional


# Handler ids added by configure_logging; sinks owned by the host app are never touched
_handler_ids: List[int] = []


def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> List[int]:
    """
    Install the toggle registry's own sinks.

    Console level defaults to LOG_LEVEL (INFO), and a rotating file sink is
    added when log_dir or LOG_DIR is given. Calling again replaces the sinks
    added by the previous call. Returns the loguru handler ids.
    """
    reset_logging()
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    log_dir = log_dir or os.getenv("LOG_DIR")

    _handler_ids.append(logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    ))

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        _handler_ids.append(logger.add(
            os.path.join(log_dir, "toggles_{time:YYYY-MM-DD}.log"),
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}",
            level="DEBUG",
            rotation="00:00",    # rotate at midnight
            retention="7 days",
            compression="zip",
            enqueue=True
        ))
    return list(_handler_ids)


def reset_logging() -> None:
    """Remove only the sinks installed by configure_logging."""
    while _handler_ids:
        logger.remove(_handler_ids.pop())


def get_logger():
    """Return the shared loguru logger."""
    return logger
