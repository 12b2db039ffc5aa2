"""
Custom Exception Classes for LegalHub

Locale routing itself never raises for request input: unknown preferences
fall back to the default locale and malformed paths are normalised. The
exceptions below cover the two places where failing loudly is correct:
bad locale configuration at boot, and an explicit language switch that
names a locale the site does not serve.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in error responses."""

    LOCALE_CONFIGURATION_INVALID = "LOCALE_CONFIGURATION_INVALID"
    LOCALE_UNSUPPORTED = "LOCALE_UNSUPPORTED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class LegalHubError(Exception):
    """Base exception class for all LegalHub exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Locale Exceptions
# ============================================================================


class LocaleConfigurationError(LegalHubError):
    """Raised at startup when the locale registry configuration is inconsistent"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code=ErrorCode.LOCALE_CONFIGURATION_INVALID,
        )


class UnsupportedLocaleError(LegalHubError):
    """Raised when a caller explicitly asks for a locale the site does not serve"""

    def __init__(self, locale: str, supported: list[str]):
        super().__init__(
            message=f"Locale '{locale}' is not supported",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"locale": locale, "supported_locales": supported},
            error_code=ErrorCode.LOCALE_UNSUPPORTED,
        )
