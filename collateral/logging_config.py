"""
Central logging configuration for the collateral registry.

Production emits one JSON object per line; development emits a compact
human-readable line. Both carry the request id bound by the request-id
middleware, so ledger decisions ("Operation accepted" / "Operation
rejected") can be traced back to the HTTP request that caused them.

Usage:
    from collateral.logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Operation accepted", extra={"operation": "add_document", "log_id": 1})
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator, Optional, Tuple

# Set by RequestIdMiddleware for the lifetime of one request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

NO_REQUEST_ID = "-"

# Third-party loggers capped at WARNING
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")

_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "request_id"}


def get_request_id() -> Optional[str]:
    return request_id_var.get()


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current request id, or '-' outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or NO_REQUEST_ID  # type: ignore[attr-defined]
        return True


def _extra_fields(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    """Fields passed through `extra=`, coerced to something JSON can hold."""
    for key, value in record.__dict__.items():
        if key in _STANDARD_RECORD_ATTRS or value is None:
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = str(value)
        yield key, value


class JsonFormatter(logging.Formatter):
    """One JSON object per record for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", NO_REQUEST_ID)
        if request_id != NO_REQUEST_ID:
            entry["request_id"] = request_id

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry.update(_extra_fields(record))
        return json.dumps(entry)


class DevFormatter(logging.Formatter):
    """Short single-line format for local runs."""

    def __init__(self):
        super().__init__(
            "%(asctime)s %(levelname)-5s [%(name)s] req=%(request_id)s %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "request_id"):
            record.request_id = NO_REQUEST_ID  # type: ignore[attr-defined]
        return super().format(record)


def _resolve_level(log_level: str, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    return getattr(logging, log_level.upper(), logging.INFO)


def _build_handler(environment: str, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JsonFormatter() if environment == "production" else DevFormatter())
    return handler


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
) -> None:
    """
    Configure the root logger.

    Safe to call more than once (reloads, tests): previous root handlers are
    replaced, never stacked.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR
        environment: 'production' selects JSON output
        debug: Forces DEBUG regardless of log_level
    """
    level = _resolve_level(log_level, debug)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.addHandler(_build_handler(environment, level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
