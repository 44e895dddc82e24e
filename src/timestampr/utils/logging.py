"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Automatic sanitization of sensitive fields

Logs are written to stderr so they never interleave with the plain status
lines the CLI prints on stdout. Import configures the WARNING default; the
CLI then calls ``configure_logging`` with LOG_LEVEL from the loaded settings.

Usage:
    >>> from timestampr.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("migration.table_altered", table="orders", columns=2)
"""

import logging
import re
import sys
from typing import Any, Dict, MutableMapping, Optional

import structlog
from structlog.types import EventDict, Processor

DEFAULT_LOG_LEVEL = "WARNING"

# Sensitive key patterns for sanitization
SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r"^DB_PASSWORD$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"

_handler: Optional[logging.Handler] = None


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Redact sensitive values from a dictionary before logging.

    Args:
        data: Dictionary that may contain sensitive data

    Returns:
        New dictionary with sensitive values replaced by [REDACTED]

    Example:
        >>> sanitize_for_logging({"password": "secret123", "user": "admin"})
        {"password": "[REDACTED]", "user": "admin"}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(pattern.match(key) for pattern in SENSITIVE_PATTERNS):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor that sanitizes sensitive fields in event_dict."""
    return sanitize_for_logging(dict(event_dict))


def _parse_level(level: Optional[str]) -> int:
    level_name = (level or DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.WARNING)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure stdlib logging and structlog.

    Safe to call more than once; the stderr handler is replaced, not
    duplicated.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), usually
            LOG_LEVEL from the loaded settings. Defaults to WARNING.
    """
    global _handler

    log_level = _parse_level(level)

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    _handler.setLevel(log_level)
    root.addHandler(_handler)
    root.setLevel(log_level)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


# Configure structlog on module import
configure_logging()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Example:
        >>> logger = bind_context(schema="shop", table="orders")
        >>> logger.info("migration.table_altered", columns=2)
    """
    return structlog.get_logger().bind(**kwargs)
