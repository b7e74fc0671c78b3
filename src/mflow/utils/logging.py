"""Logging configuration for mflow."""

import logging
import sys
from pathlib import Path

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_file: Path | str | None = None,
    *,
    include_timestamp: bool = False,
) -> None:
    """Configure logging for the application.

    Console output is kept short for command-line use; the optional log file
    always records timestamps and logger names.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file.
        include_timestamp: Whether console messages carry timestamps too.
    """
    package_logger = logging.getLogger("mflow")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    package_logger.handlers.clear()
    package_logger.propagate = False

    console_format = FILE_FORMAT if include_timestamp else CONSOLE_FORMAT
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(console_format, datefmt=DATE_FORMAT))
    package_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        package_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Short module name, e.g. ``"cli"``.

    Returns:
        Logger under the ``mflow`` namespace.
    """
    return logging.getLogger(f"mflow.{name}")
