"""Logging setup for the rate engine: plain or JSON lines with structured extras."""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, date, datetime
from typing import Any

from flask import g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

LOGGING_CONFIG_FLAG = "_logging_configured"
REQUEST_LOGGING_FLAG = "_request_logging_configured"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JSONLogFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` fields are merged at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_") or value is None:
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default, separators=(",", ":"))


class RequestIdFilter(logging.Filter):
    """Stamp records emitted while serving a request with its correlation id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = _current_request_id()
        return True


def setup_logging(app) -> None:
    """Install a single root handler using the app's LOG_* settings."""

    if app.config.get(LOGGING_CONFIG_FLAG):
        return

    level = _resolve_level(app.config.get("LOG_LEVEL"))
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter())
    if app.config.get("LOG_JSON_ENABLED"):
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(app.config.get("LOG_FORMAT") or DEFAULT_LOG_FORMAT))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # urllib3 warns on every retry; HTTPClient reports the final outcome itself.
    logging.getLogger("urllib3").setLevel(max(level, logging.ERROR))
    app.logger.handlers = []
    app.logger.setLevel(level)
    app.logger.propagate = True

    app.config[LOGGING_CONFIG_FLAG] = True


def init_request_logging(app) -> None:
    """Assign a request id to each request and log its completion."""

    if app.config.get(REQUEST_LOGGING_FLAG):
        return

    @app.before_request
    def _start_request_logging():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_start = time.perf_counter()

    @app.after_request
    def _log_request(response):
        response.headers.setdefault(REQUEST_ID_HEADER, g.request_id)
        app.logger.info(
            "%s %s -> %s",
            request.method,
            request.path,
            response.status_code,
            extra={
                "event": "request.completed",
                "route": request.url_rule.rule if request.url_rule else request.path,
                "status": response.status_code,
                "duration_ms": round((time.perf_counter() - g.request_start) * 1000, 3),
            },
        )
        return response

    app.config[REQUEST_LOGGING_FLAG] = True


def provider_log_extra(
    *,
    provider: str,
    base: str,
    target: str,
    event: str,
    status: str,
    duration_ms: float | None = None,
    error: str | None = None,
) -> dict[str, Any]:
    """Structured ``extra`` for a single step of resolving ``base``/``target``."""

    extra: dict[str, Any] = {
        "event": event,
        "provider": provider,
        "pair": f"{base}/{target}",
        "base": base,
        "target": target,
        "status": status,
    }
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 3)
    if error:
        extra["error"] = error
    return extra


def _current_request_id() -> str | None:
    if not has_request_context():
        return None
    return getattr(g, "request_id", None)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, set | frozenset):
        return sorted(value, key=str)
    return str(value)


def _resolve_level(level: Any) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level or "INFO").upper())
    return resolved if isinstance(resolved, int) else logging.INFO
