"""
Services Module - Cross-cutting services for the strategy engine.

- Logging and observability (structured formatters, match-run logging)
"""

from .logging_config import (
    ContextLogger,
    JsonFormatter,
    MatchingLogger,
    ReadableFormatter,
    configure_from_settings,
    configure_logging,
    get_logger,
    session_id_var,
)

__all__ = [
    "ContextLogger",
    "JsonFormatter",
    "MatchingLogger",
    "ReadableFormatter",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "session_id_var",
]
