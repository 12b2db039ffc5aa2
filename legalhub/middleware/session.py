"""
Session stage hook

Requests that already carry a locale prefix are handed to a session
refresher before reaching the route. The auth provider owns the actual
refresh; this module only defines the call shape and the default stage,
which continues the pipeline untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import Request
    from starlette.responses import Response


class SessionRefresher(Protocol):
    async def __call__(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response: ...


async def forward_request(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Default session stage: no refresh, continue with the next handler."""
    return await call_next(request)
