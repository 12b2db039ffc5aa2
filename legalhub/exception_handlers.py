"""
Error responses

Every handled error leaves the app in one envelope:

    {"error": {"status_code": 400, "error_code": "LOCALE_UNSUPPORTED",
               "message": "...", "details": {...}, "path": "/api/i18n/switch"}}

Three failure shapes reach a client here: ``LegalHubError`` (an unsupported
locale on the switch endpoint), HTTP errors raised by routing (unknown
pages, wrong method) and query validation errors. Anything else has no
handler and reaches the server unchanged.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from legalhub.exceptions import ErrorCode, LegalHubError

logger = logging.getLogger(__name__)


def error_response(
    request: Request,
    status_code: int,
    error_code: ErrorCode,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "status_code": status_code,
        "error_code": error_code.value,
        "message": message,
        "path": request.url.path,
    }
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content={"error": body})


async def handle_legalhub_error(request: Request, exc: LegalHubError) -> JSONResponse:
    logger.warning(
        f"{exc.error_code.value}: {exc.message}",
        extra={"path": request.url.path, "error_code": exc.error_code.value},
    )
    return error_response(request, exc.status_code, exc.error_code, exc.message, exc.details)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error_code = ErrorCode.RESOURCE_NOT_FOUND if exc.status_code == 404 else ErrorCode.UNKNOWN_ERROR
    return error_response(request, exc.status_code, error_code, str(exc.detail))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed query parameters, reported per parameter."""
    problems = [{"field": str(error["loc"][-1]), "message": error["msg"]} for error in exc.errors()]
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorCode.VALIDATION_FAILED,
        "Validation error",
        {"validation_errors": problems},
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(LegalHubError, handle_legalhub_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
