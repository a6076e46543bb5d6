"""
Centralized logging for undrstnd.

Wraps the standard :mod:`logging` package with helpers for the events the
adapter reports: outgoing requests, dropped tools and settings, and API
failures.  Configure once with :func:`configure_logging`.
"""

import logging
import os
import sys
from typing import Optional


_DEFAULT_LEVEL = os.getenv("UNDRSTND_LOG_LEVEL", "WARNING").upper()


class UndrstndLogger:
    """Thin wrapper around the ``undrstnd`` logger."""

    def __init__(self, name: str = "undrstnd"):
        self._logger = logging.getLogger(name)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def request(self, url: str, model_id: str, n_messages: int) -> None:
        """Log a chat-completion request before it is sent."""
        self._logger.debug("REQUEST url=%s model=%s messages=%d", url, model_id, n_messages)

    def unsupported(self, kind: str, detail: str) -> None:
        """Log a tool or setting that will not reach the wire."""
        self._logger.warning("UNSUPPORTED [%s] %s", kind, detail)

    def api_error(self, status_code: Optional[int], message: str) -> None:
        """Log a failed API call."""
        self._logger.error("API_ERROR status=%s message=%r", status_code, message)


_logger: Optional[UndrstndLogger] = None


def get_logger() -> UndrstndLogger:
    """Return the package logger, creating it on first call."""
    global _logger
    if _logger is None:
        _logger = UndrstndLogger()
    return _logger


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    fmt: str = "[%(levelname)s] [undrstnd] %(message)s",
) -> None:
    """
    Configure the ``undrstnd`` logger.

    Args:
        level: Log level string. Defaults to ``UNDRSTND_LOG_LEVEL``, then "WARNING".
        log_file: Optional path to also write logs to.
        fmt: Format string for the console handler.
    """
    effective_level = (level or _DEFAULT_LEVEL).upper()

    logger = logging.getLogger("undrstnd")
    logger.setLevel(effective_level)
    logger.handlers.clear()
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(fmt))
    logger.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(
            logging.Formatter("%(asctime)s | %(name)s | %(levelname)s | %(message)s")
        )
        logger.addHandler(fh)


__all__ = ["UndrstndLogger", "get_logger", "configure_logging"]
