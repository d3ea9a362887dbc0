"""
Logging for shopcart.

Modules take a named logger at import time and never touch handlers:

    from shopcart.logging import get_logger
    logger = get_logger(__name__)

The entry point attaches output once the configuration is known:

    configure_logging(config.log_level)

Until then records fall through to the standard library's last-resort
handler (warnings and errors on stderr).
"""

import logging
import sys
from functools import cache

LOGGER_NAME = "shopcart"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Control characters that would let a value start a fake log line
_LOG_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})

_handler: logging.Handler | None = None


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Send package logs to stderr at the given level.

    Calling again swaps the handler rather than stacking a second one, and
    binds it to the current ``sys.stderr``. Unknown level names mean INFO.

    Returns:
        The package logger
    """
    global _handler

    package_logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(_handler)
    package_logger.setLevel(_resolve_level(level))
    return package_logger


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Render an untrusted value on one log line.

    Record lines from saved files and typed discount codes pass through here.
    Control characters are escaped and the result is cut to max_length.
    Empty values show as "N/A".
    """
    if not value:
        return "N/A"
    text = str(value).translate(_LOG_ESCAPES)
    if len(text) > max_length:
        text = text[:max_length] + "..."
    return text


__all__ = [
    "LOG_FORMAT",
    "LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "sanitize_string_for_logging",
]
