"""Logging setup for schema_typegen.

Modules obtain loggers with ``get_logger(__name__)``. Nothing is printed until
``setup_logging`` installs a rich handler on the package logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "schema_typegen"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)


def setup_logging(level: str = "warning", console: Console | None = None) -> logging.Logger:
    """Configure the package logger with a RichHandler.

    Calling it again replaces the previously installed handler instead of
    stacking a second one.

    Args:
        level: One of debug, info, warning, error.
        console: Console to log to (stderr by default).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_LEVELS.get(level.lower(), logging.WARNING))

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
