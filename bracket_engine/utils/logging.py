"""
Stdlib logging setup for the command line entry point.

The core and storage modules log through ``logging.getLogger(__name__)``;
this attaches handlers to the package logger so those records reach the
console in the same environment-dependent shape as the structlog events.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from bracket_engine.config import settings

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _formatter(environment: str, log_format: str) -> logging.Formatter:
    if environment == "production" or log_format == "json":
        return JsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(fmt=CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    name: str = "bracket_engine",
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    environment: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to a package logger.

    Args:
        name: Logger name
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to
            ``settings.observability.log_level``
        log_file: Optional file path for log output
        environment: Defaults to ``settings.observability.environment``;
            production writes JSON lines

    Returns:
        The configured logger
    """
    observability = settings.observability
    level = (level or observability.log_level).upper()
    environment = environment or observability.environment

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level))

    # Re-running replaces handlers instead of stacking them
    logger.handlers = []

    formatter = _formatter(environment, observability.log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
