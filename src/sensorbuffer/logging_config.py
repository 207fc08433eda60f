"""
Logging configuration for SensorBuffer.

The library itself only creates module loggers under ``sensorbuffer``;
handlers are installed by applications (the CLI) through ``setup_logging``.
Records go to stderr through rich, so they never mix with the paths the CLI
prints on stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import Verbosity

LOGGER_NAME = "sensorbuffer"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: Verbosity = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Install a rich stderr handler (and optionally a file handler) for SensorBuffer.

    Args:
        verbosity: ``quiet`` logs errors only, ``normal`` warnings and up,
                   ``verbose`` everything including per-write debug records
        log_file: Optional file path to append plain-text logs to

    Returns:
        The configured ``sensorbuffer`` logger
    """
    level = LEVELS[verbosity]
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # Owners and resources are free text and may contain [brackets]
            markup=False,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``sensorbuffer`` namespace.

    Args:
        name: Module name (e.g., 'sensorbuffer.storage.writer' or 'storage.writer');
              None returns the package logger
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)

    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
