"""FastAPI dependencies exposing what ``create_app`` built: settings, registry, request locale."""

from fastapi import Request

from legalhub.config import Settings
from legalhub.i18n.locale import Locale, LocaleRegistry
from legalhub.i18n.routing import locale_from_path


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_locale_registry(request: Request) -> LocaleRegistry:
    return request.app.state.locale_registry


def get_request_locale(request: Request) -> Locale:
    """Locale named by the URL prefix, or the default for unprefixed routes."""
    registry = get_locale_registry(request)
    return locale_from_path(request.scope["path"], registry) or registry.default
