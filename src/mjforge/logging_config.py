"""
Logging setup for mjforge.

One loguru logger for the whole package. Console output goes to stderr and is
silenced in machine mode so JSON on stdout stays clean; a rotating file log is
available on request.
"""

import os
import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
LOG_FILE_NAME = "mjforge.log"

_configured = False


def _env_flag(key: str) -> bool:
    return os.getenv(key, "").lower() in ("1", "true", "yes")


def get_log_dir() -> Path:
    """Directory for the file log (MJFORGE_LOG_DIR, default .mjforge/logs)."""
    return Path(os.getenv("MJFORGE_LOG_DIR", ".mjforge/logs"))


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None):
    """
    Install the mjforge log sinks.

    Args:
        level: Console level (default: INFO)
        suppress_console: Drop the stderr sink. None reads MJFORGE_MACHINE_MODE.
        enable_file_logging: Add the rotating file sink. None reads MJFORGE_FILE_LOGGING.

    Calling again with no arguments keeps the current sinks; any explicit
    argument replaces them.
    """
    global _configured

    if _configured and suppress_console is None and enable_file_logging is None:
        return
    _configured = True

    if suppress_console is None:
        suppress_console = _env_flag("MJFORGE_MACHINE_MODE")
    if enable_file_logging is None:
        enable_file_logging = _env_flag("MJFORGE_FILE_LOGGING")

    logger.remove()

    if not suppress_console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if enable_file_logging:
        log_dir = get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / LOG_FILE_NAME,
            level="INFO",
            rotation="10 MB",
            retention="1 day",
            compression="gz",
            catch=True,
        )


setup_logging()
