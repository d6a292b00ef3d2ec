"""
Logging setup using Loguru.

The blessed UI owns the terminal, so log records only ever go to a rotating
file in the data directory.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {thread.name} | {name}:{line} | {message}"


def default_log_file() -> Path:
    return get_data_dir() / "spotify-tui.log"


def setup_loguru(log_file: Path, level: str = "INFO") -> None:
    """
    Configure loguru for file-only logging (blessed UI handles console display).

    Args:
        log_file: Path to log file
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
    """
    # Remove default handler
    logger.remove()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level,
        format=LOG_FORMAT,
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def setup_logging(config: LoggingConfig, debug: bool = False) -> Path:
    """Configure logging from the [logging] config section.

    Args:
        config: Logging configuration
        debug: Force DEBUG level regardless of config

    Returns:
        Path of the log file in use
    """
    log_file: Optional[Path] = (
        Path(config.log_file).expanduser() if config.log_file else None
    )
    log_file = log_file or default_log_file()
    setup_loguru(log_file, level="DEBUG" if debug else config.level.upper())
    return log_file


def log(message: str, level: str = "info") -> None:
    """
    Log a user-facing message and print it.

    Only for messages before the blessed UI takes over the terminal
    (authorization prompts, startup failures).

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    getattr(logger, level)(message)
    print(message)
