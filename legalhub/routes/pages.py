"""
Locale-prefixed page routes

Page rendering is owned by the frontend; these handlers only report which
locale and page a request resolved to, so the routing pipeline can be
exercised end to end.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from legalhub.dependencies import get_request_locale
from legalhub.i18n.locale import Locale

pages_router = APIRouter(tags=["Pages"])


def _page(prefix: str, locale: Locale, page: str) -> dict[str, str]:
    # An unprefixed path resolves to the default locale, which never equals its first segment
    if prefix != locale.value:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    return {"locale": locale.value, "page": f"/{page}"}


@pages_router.get("/{prefix}")
async def locale_home(prefix: str, locale: Locale = Depends(get_request_locale)):
    return _page(prefix, locale, "")


@pages_router.get("/{prefix}/{page:path}")
async def locale_page(prefix: str, page: str, locale: Locale = Depends(get_request_locale)):
    return _page(prefix, locale, page)
