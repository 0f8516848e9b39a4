# refer - https://loguru.readthedocs.io/en/stable/api/logger.html
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

log_dir = Path("logs").resolve()
log_dir.mkdir(exist_ok=True)
error_log = log_dir / "errors_{time:YYYY-MM-DD}.log"

logger.remove() # drop the default stderr sink


def _add_console_sink(level: str) -> int:
    return logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)


_console_sink_id = _add_console_sink("INFO")

# documents that fail to read or parse end up here, whatever the console level
error_sink_id = logger.add(
    error_log,
    format=FILE_FORMAT,
    level="ERROR",
    rotation="5 MB",
    retention="90 days",
)


def get_logger(name: Optional[str] = None):
    if name:
        return logger.bind(name=name)
    return logger


def add_log_file(filepath: str, level: str = "INFO", **kwargs) -> int:
    return logger.add(filepath, level=level, format=FILE_FORMAT, **kwargs)


def set_log_level(level: str) -> None:
    """Change the console level; file sinks keep their own levels."""
    global _console_sink_id
    logger.remove(_console_sink_id)
    _console_sink_id = _add_console_sink(level.upper())
