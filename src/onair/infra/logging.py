"""
Logging configuration for OnAir.

This module configures structlog for JSON logging across the application.
"""

import logging
import re
import sys
from typing import Any

import structlog

from .settings import settings

_SECRET_KEYS = [
    "token",
    "password",
    "secret",
    "api_key",
    "connection_string",
    "database_url",
]

_SECRET_PATTERNS = [
    r"://[^:/]+:[^@]+@",  # URLs with credentials
    r"token=[^&\s]+",  # Token parameters
    r"password=[^&\s]+",  # Password parameters
]


def _redact_value(value: Any) -> Any:
    if isinstance(value, str):
        for pattern in _SECRET_PATTERNS:
            value = re.sub(pattern, _mask_match, value)
        return value
    elif isinstance(value, dict):
        return {k: _redact_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_redact_value(item) for item in value]
    return value


def _mask_match(match: re.Match[str]) -> str:
    text = match.group(0)
    if text.startswith("://"):
        return "://***@"
    return text.split("=")[0] + "=***"


def redact_secrets(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Redact sensitive information from log events."""
    for key in list(event_dict.keys()):
        if any(secret in key.lower() for secret in _SECRET_KEYS):
            event_dict[key] = "***REDACTED***"
        else:
            event_dict[key] = _redact_value(event_dict[key])
    return event_dict


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging and structlog for JSON output."""
    log_level = (level or settings.log_level).upper()
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            redact_secrets,  # Redact secrets before rendering
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service="onair", env=settings.env)

