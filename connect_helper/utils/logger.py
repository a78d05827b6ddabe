"""
Logging setup for the connect helper.

This module provides:
1. ContextAwareLogger, which renders `extra` attributes into the message
   (pipe-delimited) while still passing them to handlers
2. CorrelationIdFilter, which stamps the current correlation ID on records
3. configure_logging / get_logger for process-wide logger access
"""

import logging
import sys
from typing import Optional, Union

from ..config import get_config

_connect_logger = None


class ContextAwareLogger:
    """
    Logger wrapper that formats extra attributes in message while preserving them.

    This ensures extras appear in console output even when the host application
    installs its own formatters.
    """

    def __init__(self, logger):
        """Initialize with an existing logger."""
        self.logger = logger

    def _log_with_formatted_extra(self, level, msg, **kwargs):
        """
        Log with extra data formatted into the message.

        Args:
            level: Logging level method to use
            msg: Log message
            **kwargs: Additional arguments including 'extra'
        """
        extra = kwargs.pop("extra", {})

        if extra:
            extra_str = " | ".join([f"{k}={v}" for k, v in extra.items()])
            full_msg = f"{msg} | {extra_str}"
        else:
            full_msg = msg

        log_method = getattr(self.logger, level)
        log_method(full_msg, extra=extra)

    def info(self, msg, **kwargs):
        """Log at INFO level with formatted extra."""
        self._log_with_formatted_extra("info", msg, **kwargs)

    def error(self, msg, **kwargs):
        """Log at ERROR level with formatted extra."""
        self._log_with_formatted_extra("error", msg, **kwargs)

    def warning(self, msg, **kwargs):
        """Log at WARNING level with formatted extra."""
        self._log_with_formatted_extra("warning", msg, **kwargs)

    def debug(self, msg, **kwargs):
        """Log at DEBUG level with formatted extra."""
        self._log_with_formatted_extra("debug", msg, **kwargs)


class CorrelationIdFilter(logging.Filter):
    """
    Logging filter that adds the current correlation ID to log records.
    """

    def filter(self, record):
        """
        Add correlation_id to the log record if one is set for this thread.

        Args:
            record: LogRecord to modify

        Returns:
            True to include the record in the log output
        """
        # Lazy import to avoid circular dependency
        from ..exceptions import get_correlation_id

        correlation_id = get_correlation_id()
        if correlation_id and not hasattr(record, "correlation_id"):
            record.correlation_id = correlation_id

        return True


def _resolve_level(log_level: Optional[Union[int, str]]) -> int:
    if log_level is None:
        log_level = get_config().logging.level
    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper(), logging.INFO)
    return log_level


def configure_logging(
    name: str = "connect_helper",
    log_level: Optional[Union[int, str]] = None,
    stream=None,
) -> "ContextAwareLogger":
    """
    Configure the package logger with a console handler.

    Args:
        name: Logger name
        log_level: Logging level (default: from config.logging.level)
        stream: Stream for the console handler (default: stdout)

    Returns:
        The configured logger wrapped with ContextAwareLogger
    """
    global _connect_logger

    log_level = _resolve_level(log_level)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(get_config().logging.format))
    console_handler.addFilter(CorrelationIdFilter())
    logger.addHandler(console_handler)

    wrapped_logger = ContextAwareLogger(logger)
    wrapped_logger.debug("Connect helper logger configured", extra={"logger_name": name})

    _connect_logger = wrapped_logger
    return wrapped_logger


def get_logger(
    log_level: Optional[Union[int, str]] = None,
) -> "ContextAwareLogger":
    """
    Get the package logger.

    Args:
        log_level: Optional log level to set on the fallback logger

    Returns:
        Logger instance
    """
    if _connect_logger is not None:
        return _connect_logger

    logger = logging.getLogger("connect_helper")
    logger.setLevel(_resolve_level(log_level))

    return ContextAwareLogger(logger)


def reset_logging() -> None:
    """Forget the configured logger so the next get_logger() builds a fresh one."""
    global _connect_logger
    _connect_logger = None
