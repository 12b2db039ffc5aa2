"""
Access logging for the locale-routed site

One JSON record per request, tagged with a request ID and carrying the
locale routing outcome (``decision``, ``locale``, ``target``) as fields of
their own. Redirect loops and unexpected fallbacks to the default locale
can then be found by querying the logs.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable, Iterable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from legalhub.i18n.locale import LocaleRegistry
from legalhub.i18n.routing import BypassRules, decide_route
from legalhub.middleware.language import wire_path, wire_query

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

ACCESS_FIELDS = ("method", "path", "status_code", "duration_ms", "decision", "locale", "target", "error_code")


class RequestIdFilter(logging.Filter):
    """Stamp every record with the current request ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line. Georgian and Cyrillic paths are kept readable."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }
        payload.update({key: getattr(record, key) for key in ACCESS_FIELDS if hasattr(record, key)})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Outermost middleware: request ID, timing and the routing outcome.

    The routing decision is recomputed from the same pure inputs the locale
    middleware sees, so nothing is stored on the request.

    Args:
        registry:    Served locales, as given to the locale middleware.
        rules:       Bypass rules, as given to the locale middleware.
        cookie_name: Preference cookie name.
        quiet_paths: Paths that are served but never logged (health checks).
    """

    def __init__(
        self,
        app: ASGIApp,
        registry: LocaleRegistry,
        rules: BypassRules | None = None,
        cookie_name: str = "NEXT_LOCALE",
        quiet_paths: Iterable[str] = (),
        logger_name: str = "legalhub.access",
    ):
        super().__init__(app)
        self.registry = registry
        self.rules = rules or BypassRules()
        self.cookie_name = cookie_name
        self.quiet_paths = frozenset(quiet_paths)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request_id_var.set(request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, started, exc_info=True)
            raise

        response.headers["X-Request-ID"] = request_id
        self._log(request, response.status_code, started)
        return response

    def _log(self, request: Request, status_code: int, started: float, exc_info: bool = False) -> None:
        path = request.scope["path"]
        if path in self.quiet_paths:
            return

        decision = decide_route(
            path=path,
            query=wire_query(request),
            stored_preference=request.cookies.get(self.cookie_name),
            registry=self.registry,
            rules=self.rules,
            encoded_path=wire_path(request),
        )
        extra = {
            "method": request.method,
            "path": path,
            "status_code": status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            "decision": decision.action.value,
        }
        if decision.locale is not None:
            extra["locale"] = decision.locale.value
        if decision.target is not None:
            extra["target"] = decision.target.url_path

        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        self.logger.log(
            level,
            f"{request.method} {path} {status_code} [{decision.action.value}]",
            extra=extra,
            exc_info=exc_info,
        )


def configure_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """Route all records through a single stderr handler with request IDs."""
    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"))
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(log_level.upper())
    # Access records come from AccessLogMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_request_id() -> str:
    return request_id_var.get("")
