"""Logging utilities for the note junction grouping tools."""

import logging
from typing import Any, Mapping, Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Union[str, Mapping[str, Any]] = "INFO",
    log_file: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
) -> None:
    """Configure logging for the grouping run.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR), or the ``logging``
            section of the settings file (keys ``level``, ``file``, ``format``)
        log_file: Optional path of a log file written next to the console output
        fmt: Log record format

    """
    if isinstance(level, Mapping):
        section = level
        level = str(section.get("level", "INFO"))
        log_file = log_file or section.get("file")
        fmt = section.get("format", fmt)

    numeric_level = logging.getLevelName(str(level).upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=numeric_level,
        format=fmt,
        handlers=handlers,
        force=True,
    )
    if numeric_level == logging.INFO and str(level).upper() != "INFO":
        logging.getLogger(__name__).warning(f"Unknown logging level {level!r}, using INFO")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance

    """
    return logging.getLogger(name)
