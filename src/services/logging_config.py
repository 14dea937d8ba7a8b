"""
Logging setup for the strategy engine.

Two output styles share one record shape: JSON lines for deployed
environments and a compact console line while developing. Records emitted
during a wizard session carry its session id, and every matching run is
summarized by MatchingLogger.
"""

import json
import logging
import sys
import time
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

# Wizard session being processed, attached to every record when set
session_id_var: ContextVar[Optional[str]] = ContextVar('session_id', default=None)

TOP_IDS_LOGGED = 3


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Structured fields attached to a record, plus the active session id."""
    context: Dict[str, Any] = {}
    session_id = session_id_var.get()
    if session_id:
        context["session_id"] = session_id
    context.update(getattr(record, 'extra_data', None) or {})
    return context


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(_record_context(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ReadableFormatter(logging.Formatter):
    """Single-line console output, optionally colored by level."""

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname.ljust(8)
        if self.use_color and record.levelname in self.LEVEL_COLORS:
            level = f"{self.LEVEL_COLORS[record.levelname]}{level}{self.RESET}"

        clock = datetime.fromtimestamp(record.created).strftime('%H:%M:%S')
        parts = [f"{clock} {level} [{record.name}] {record.getMessage()}"]

        context = _record_context(record)
        if context:
            parts.append(' '.join(f"{key}={value}" for key, value in context.items()))
        return ' | '.join(parts)


class ContextLogger(logging.LoggerAdapter):
    """
    Adapter that binds fields to every record it emits.

    Bound fields and per-call extra_data are merged into record.extra_data;
    per-call values win on conflict.
    """

    def process(self, msg: str, kwargs: Dict) -> tuple:
        extra = dict(kwargs.get('extra') or {})
        merged = {**self.extra, **(extra.get('extra_data') or {})}

        session_id = session_id_var.get()
        if session_id and merged.get('session_id') is None:
            merged['session_id'] = session_id

        extra['extra_data'] = merged
        kwargs['extra'] = extra
        return msg, kwargs


def _handler(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """
    Replace the root handlers with the engine's console (and file) output.

    Args:
        level: Root log level name
        json_output: JSON lines on the console instead of readable lines
        log_file: Also write JSON lines to this file
    """
    handlers: List[logging.Handler] = [
        _handler(
            logging.StreamHandler(sys.stdout),
            JsonFormatter() if json_output else ReadableFormatter(),
        )
    ]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_handler(logging.FileHandler(log_file), JsonFormatter()))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def configure_from_settings() -> None:
    """Configure logging from STRATEGY_LOG_LEVEL / STRATEGY_JSON_LOGS."""
    from config.settings import get_settings
    settings = get_settings()
    configure_logging(level=settings.log_level, json_output=settings.json_logs)


def get_logger(name: str, **context) -> ContextLogger:
    """Logger for name with context bound to every record."""
    return ContextLogger(logging.getLogger(name), context)


class MatchingLogger:
    """
    Summary log for one strategy matching run.

    start_match records the profile summary, log_filtered the eligibility
    counts, and log_result the ranked ids and elapsed time.
    """

    LOGGER_NAME = "strategy_matching"

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id
        self.logger = get_logger(self.LOGGER_NAME, session_id=session_id)
        self._started: Optional[float] = None

    def start_match(self, profile_summary: Dict[str, Any], catalog_size: int) -> None:
        self._started = time.perf_counter()
        self.logger.debug(
            "Starting strategy match",
            extra={'extra_data': {**profile_summary, 'catalog_size': catalog_size}},
        )

    def log_filtered(self, eligible: int, suppressed: int) -> None:
        self.logger.debug(
            "Eligibility filter applied",
            extra={'extra_data': {'eligible': eligible, 'suppressed': suppressed}},
        )

    def log_result(self, ranked_ids: Iterable[str]) -> int:
        """Log the ranked result; returns elapsed milliseconds since start_match."""
        ranked = list(ranked_ids)
        elapsed_ms = 0
        if self._started is not None:
            elapsed_ms = int((time.perf_counter() - self._started) * 1000)

        self.logger.info(
            f"Matched {len(ranked)} strategies",
            extra={'extra_data': {
                'matched': len(ranked),
                'top': ranked[:TOP_IDS_LOGGED],
                'duration_ms': elapsed_ms,
            }},
        )
        return elapsed_ms

    def log_warning(self, message: str, **data) -> None:
        self.logger.warning(message, extra={'extra_data': data})
