"""
Locale Routing Middleware

Every page URL must start with a locale segment. Per request:
  1. Bypassed paths (assets, API, framework internals) continue untouched.
  2. Paths without a locale prefix are redirected to ``/{locale}{path}``,
     where the locale comes from the preference cookie when it names a
     served locale, otherwise the default.
  3. Locale-prefixed paths go to the session stage with the request as-is.

The cookie is only read here; the language switch endpoint writes it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

from legalhub.i18n.routing import BypassRules, RouteAction, decide_route
from legalhub.middleware.session import forward_request

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from legalhub.i18n.locale import LocaleRegistry
    from legalhub.middleware.session import SessionRefresher

logger = logging.getLogger(__name__)


def wire_path(request: Request) -> str:
    """Request path as the client sent it, with percent-escapes intact."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.split(b"?", 1)[0].decode("latin-1")
    return quote(request.scope["path"], safe="/:@!$&'()*+,;=~")


def wire_query(request: Request) -> str:
    return request.scope.get("query_string", b"").decode("latin-1")


class LocaleRoutingMiddleware(BaseHTTPMiddleware):
    """Enforce the locale prefix on page URLs.

    Args:
        registry:         Served locales and the default.
        rules:            Bypass rules; defaults cover ``_next``, ``api`` and assets.
        cookie_name:      Cookie holding the stored locale preference.
        session_refresher: Stage invoked for locale-prefixed requests.
        redirect_status:  Status code of the locale redirect.
    """

    def __init__(
        self,
        app: ASGIApp,
        registry: LocaleRegistry,
        rules: BypassRules | None = None,
        cookie_name: str = "NEXT_LOCALE",
        session_refresher: SessionRefresher = forward_request,
        redirect_status: int = 307,
    ):
        super().__init__(app)
        self.registry = registry
        self.rules = rules or BypassRules()
        self.cookie_name = cookie_name
        self.session_refresher = session_refresher
        self.redirect_status = redirect_status

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # request.url is rebuilt from the decoded path, so an escaped "?" or "#" would split it
        path = request.scope["path"]
        preference = request.cookies.get(self.cookie_name)
        decision = decide_route(
            path=path,
            query=wire_query(request),
            stored_preference=preference,
            registry=self.registry,
            rules=self.rules,
            encoded_path=wire_path(request),
        )

        if decision.action is RouteAction.BYPASS:
            return await call_next(request)

        if decision.action is RouteAction.PASS_THROUGH:
            return await self.session_refresher(request, call_next)

        if preference is not None and self.registry.parse(preference) is None:
            logger.debug(f"Ignoring unsupported {self.cookie_name} cookie value", extra={"path": path})

        target = decision.target
        logger.debug(
            f"Locale redirect {path} -> {target.path}",
            extra={"path": path, "decision": decision.action.value, "target": target.url_path},
        )
        url = request.url.replace(path=target.path, query=target.query, fragment="")
        return RedirectResponse(url=str(url), status_code=self.redirect_status)
