"""
Structured logging for the CareerHub API.

- JSON lines in production, a compact single line elsewhere
- request_id bound per request through a ContextVar and stamped on every record
- log_event() for domain events (activity.appended, streak.updated, stats.computed, ...)
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Dict, Optional

LOGGER_NAME = "careerhub"

request_id_ctx_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Record attributes promoted to top-level JSON keys when present
_STRUCTURED_FIELDS = (
    "user_id",
    "event_type",
    "error_code",
    "category",
    "entry_id",
    "streak_count",
    "score",
    "path",
    "method",
    "status",
    "latency_bucket",
)

# (upper bound in ms, label); the last bucket catches everything slower
_LATENCY_BUCKETS = (
    (10, "<10ms"),
    (100, "10-100ms"),
    (500, "100-500ms"),
    (1000, "500-1000ms"),
)

_TRUNCATE_AT = 500


def get_request_id(default: Optional[str] = None) -> Optional[str]:
    rid = request_id_ctx_var.get()
    return default if rid is None else rid


def latency_bucket_ms(latency_ms: Optional[float]) -> str:
    """Coarse latency label so request logs stay low-cardinality."""
    if latency_ms is None:
        return "unknown"
    for upper, label in _LATENCY_BUCKETS:
        if latency_ms < upper:
            return label
    return ">=1000ms"


def _utc_timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z")


class RequestIdFilter(logging.Filter):
    """Fill record.request_id from the current request context when the caller didn't."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = get_request_id()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": _utc_timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            (name, getattr(record, name))
            for name in _STRUCTURED_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class PrettyFormatter(logging.Formatter):
    """`<ts> LEVEL [careerhub] [rid=..] [user=..] message` plus traceback if any."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [_utc_timestamp(record), record.levelname, f"[{LOGGER_NAME}]"]
        rid = getattr(record, "request_id", None)
        if rid:
            parts.append(f"[rid={rid}]")
        uid = getattr(record, "user_id", None)
        if uid:
            parts.append(f"[user={uid}]")
        parts.append(record.getMessage())
        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(env: str = "development") -> None:
    """Install a single stdout handler on the careerhub logger (idempotent)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if env.lower() == "production" else PrettyFormatter())
    handler.addFilter(RequestIdFilter())

    logger.handlers = [handler]
    logger.propagate = True

    # Uvicorn keeps its own handlers
    for name in ("uvicorn", "uvicorn.error"):
        logging.getLogger(name).propagate = False


def _loggable(value):
    """Numbers pass through; everything else is stringified and capped."""
    if isinstance(value, (bool, int, float)):
        return value
    try:
        text = str(value)
    except Exception:
        return "<unserializable>"
    if len(text) > _TRUNCATE_AT:
        return text[:_TRUNCATE_AT] + "...<truncated>"
    return text


def log_event(
    level: str,
    msg: str,
    *,
    user_id: Optional[str] = None,
    request_id: Optional[str] = None,
    event_type: Optional[str] = None,
    error_code: Optional[str] = None,
    extra: Optional[Dict[str, object]] = None,
    exc_info: bool = False,
):
    """
    Emit one structured domain event on the careerhub logger.

    Args:
        level: Logger method name ("info", "warning", "error", ...)
        msg: Event name, e.g. "streak.updated"
        user_id: Subject of the event
        request_id: Explicit correlation id (defaults to the bound request)
        event_type: Finer-grained type, e.g. "streak.reset"
        error_code: Machine-readable failure code
        extra: Additional fields; strings are truncated
        exc_info: Attach the active exception's traceback
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        # Scripts and tests may log before the app configured anything
        configure_logging(os.getenv("ENV", "development"))

    fields: Dict[str, object] = {
        "request_id": request_id or get_request_id(),
        "user_id": user_id,
    }
    if event_type:
        fields["event_type"] = event_type
    if error_code:
        fields["error_code"] = error_code
    for key, value in (extra or {}).items():
        fields[key] = _loggable(value)

    getattr(logger, level, logger.info)(msg, extra=fields, exc_info=exc_info)
