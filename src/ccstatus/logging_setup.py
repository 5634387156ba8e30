"""Logging configuration for the ``ccstatus`` command.

Library modules only create module-level loggers
(``logging.getLogger(__name__)``); handlers are attached here, once, by
:func:`~ccstatus.app.main_callback`. Records go to stderr through
:class:`rich.logging.RichHandler` and, when a log file is configured, also
to a plain :class:`logging.FileHandler`.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ccstatus.models import LogLevel

_LOGGER_NAME = "ccstatus"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    log_file: Optional[str] = None,
    no_color: bool = False,
) -> logging.Logger:
    """Attach handlers to the ``ccstatus`` logger and set its level.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Minimum level to emit.
        log_file: Optional path that also receives every record.
        no_color: Disable Rich colour in the stderr handler.

    Returns:
        The configured ``ccstatus`` logger.
    """
    level_name = level.value if isinstance(level, LogLevel) else str(level).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = Console(stderr=True, no_color=no_color)
    stderr_handler = RichHandler(console=console, show_path=False, show_time=False)
    logger.addHandler(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.setLevel(numeric)
    logger.propagate = False

    # httpx logs every request at INFO; only surface that when debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if numeric <= logging.DEBUG else logging.WARNING)
    return logger
