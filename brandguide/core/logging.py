"""Structured key=value logging for the brand guide service."""

import logging
import sys
from typing import Any

# Request context promoted to top-level fields when passed as ``extra``
CONTEXT_FIELDS = ("guide_id", "user_id", "scope")


class StructuredFormatter(logging.Formatter):
    """Render records as ``key=value`` pairs on one line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, dict):
            log_data.update(extra_data)

        has_exception = bool(record.exc_info and record.exc_info[0] is not None)
        if has_exception:
            log_data["error_type"] = record.exc_info[0].__name__

        line = " ".join(f"{k}={v}" for k, v in log_data.items())
        if has_exception:
            # Traceback follows on its own lines
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _level_for_env() -> int:
    try:
        from brandguide.core.config import get_settings

        env = get_settings().BRANDGUIDE_ENV
    except Exception:
        # Settings not loadable yet (missing env at import time)
        return logging.INFO
    return logging.DEBUG if env == "dev" else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the structured stdout handler attached once.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger; DEBUG in dev, INFO elsewhere
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_for_env())

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """
    Log with request context and extra fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        **kwargs: Context fields (guide_id, user_id, scope) and any other
            key/value data
    """
    extra: dict[str, Any] = {
        name: kwargs.pop(name) for name in CONTEXT_FIELDS if name in kwargs
    }
    extra["extra_data"] = kwargs
    logger.log(level, msg, extra=extra)
