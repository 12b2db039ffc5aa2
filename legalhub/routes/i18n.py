"""
i18n Routes

i18n_router  (prefix: /api/i18n)
    GET    /languages   → list served languages in display order (public)
    GET    /switch      → store the locale preference cookie and redirect
                          to the same page in the chosen language

Both live under the API prefix, so the locale routing middleware never
redirects them.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from legalhub.config import Settings
from legalhub.dependencies import get_locale_registry, get_settings
from legalhub.exceptions import UnsupportedLocaleError
from legalhub.i18n.locale import LocaleRegistry, get_language_info
from legalhub.i18n.routing import swap_locale

i18n_router = APIRouter(tags=["Internationalization"])
logger = logging.getLogger(__name__)


class LanguageInfo(BaseModel):
    code: str
    name: str
    label: str
    is_default: bool


def _safe_next_path(next_path: str) -> str:
    """Only same-site absolute paths are followed; anything else goes home."""
    if not next_path.startswith("/") or next_path.startswith("//") or "\\" in next_path:
        return "/"
    return next_path


@i18n_router.get("/languages", response_model=list[LanguageInfo])
async def list_supported_languages(
    registry: LocaleRegistry = Depends(get_locale_registry),
) -> list[LanguageInfo]:
    """List all served languages with native name and switcher label (public, no auth)."""
    return [LanguageInfo(**get_language_info(locale, registry)) for locale in registry]


@i18n_router.get("/switch")
async def switch_language(
    locale: str = Query(..., description="Target locale code, e.g. 'en'"),
    next_path: str = Query("/", alias="next", description="Page the user is switching from"),
    registry: LocaleRegistry = Depends(get_locale_registry),
    app_settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Remember the chosen language and send the user to the translated page."""
    new_locale = registry.parse(locale)
    if new_locale is None:
        raise UnsupportedLocaleError(locale, list(registry.codes))

    path, _, query = _safe_next_path(next_path).partition("?")
    target = swap_locale(path, new_locale, registry)
    if query:
        target = f"{target}?{query}"

    logger.info(f"Language switched to {new_locale.value}", extra={"path": path, "target": target})

    response = RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=app_settings.locale_cookie_name,
        value=new_locale.value,
        max_age=app_settings.locale_cookie_max_age,
        path="/",
        samesite="lax",
    )
    return response
