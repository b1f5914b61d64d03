"""Logging configuration for the ``ledgerly`` package.

Entry points (the CLI) call :func:`configure_logging` at startup. It attaches a
single ``StreamHandler`` to the package logger ``"ledgerly"``. Library modules
only call ``logging.getLogger(__name__)`` and never add handlers of their own.
"""

import logging
import os
import sys
from typing import IO, Optional, Union

LOG_LEVEL_ENV = "LEDGERLY_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_PKG_LOGGER_NAME = "ledgerly"
_handler: Optional[logging.Handler] = None

logging.getLogger(_PKG_LOGGER_NAME).addHandler(logging.NullHandler())


def parse_level(level: Union[int, str, None]) -> int:
    """Resolve a level given as int, name or numeric string.

    ``None`` falls back to ``LEDGERLY_LOG_LEVEL`` and then INFO.

    Raises:
        ValueError: If a level name is not recognized
    """
    if isinstance(level, int):
        return level
    if level is None:
        env_val = os.getenv(LOG_LEVEL_ENV)
        return parse_level(env_val) if env_val else logging.INFO

    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'")
    return numeric


def configure_logging(
    level: Union[int, str, None] = None,
    fmt: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Point the package logger at one stream handler.

    Calling it again replaces the handler from the previous call.

    Args:
        level: Logging level; see :func:`parse_level`
        fmt: Format string, ``DEFAULT_FORMAT`` if omitted
        stream: Output stream, the current ``sys.stderr`` if omitted

    Returns:
        The configured package logger
    """
    global _handler

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for existing in list(logger.handlers):
        if existing is _handler or isinstance(existing, logging.NullHandler):
            logger.removeHandler(existing)

    resolved = parse_level(level)
    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setLevel(resolved)
    _handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(_handler)
    # No double emission through the root logger
    logger.propagate = False
    return logger
