"""
i18n (Internationalization) package

Locale registry, language metadata and the locale-prefix routing policy
used by the site's pages (``/ka/...``, ``/en/...``, ``/ru/...``).
"""

from .locale import (
    LANGUAGE_LABELS,
    LANGUAGE_NAMES,
    Locale,
    LocaleRegistry,
    build_locale_registry,
    get_language_info,
)
from .routing import (
    BypassRules,
    PathKind,
    RedirectTarget,
    RouteAction,
    RoutingDecision,
    build_bypass_rules,
    build_redirect_target,
    classify,
    decide_route,
    locale_from_path,
    normalize_path,
    resolve_locale,
    swap_locale,
)

__all__ = [
    "LANGUAGE_LABELS",
    "LANGUAGE_NAMES",
    "BypassRules",
    "Locale",
    "LocaleRegistry",
    "PathKind",
    "RedirectTarget",
    "RouteAction",
    "RoutingDecision",
    "build_bypass_rules",
    "build_locale_registry",
    "build_redirect_target",
    "classify",
    "decide_route",
    "get_language_info",
    "locale_from_path",
    "normalize_path",
    "resolve_locale",
    "swap_locale",
]
