"""
Locale routing policy

Every page URL on the site carries its language as the first path segment
(``/ka/companies``, ``/en/news/...``). This module decides, per request,
whether a path is left alone, passed through, or redirected to a
locale-prefixed copy of itself. Everything here is pure: inputs are plain
strings and the immutable registry/rules built at startup.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from legalhub.config import Settings
    from legalhub.i18n.locale import Locale, LocaleRegistry


class PathKind(str, Enum):
    BYPASS = "bypass"
    NEEDS_LOCALE = "needs_locale"
    HAS_LOCALE = "has_locale"


class RouteAction(str, Enum):
    BYPASS = "bypass"
    PASS_THROUGH = "pass_through"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class BypassRules:
    """Path shapes that must never receive a locale prefix."""

    internal_prefixes: frozenset[str] = frozenset({"_next", "_static", "_vercel"})
    api_prefix: str = "api"
    favicon_name: str = "favicon.ico"

    def matches(self, path: str) -> bool:
        segments = path.lstrip("/").split("/")
        first, last = segments[0], segments[-1]
        if first in self.internal_prefixes or first == self.api_prefix:
            return True
        if path == f"/{self.favicon_name}":
            return True
        # Static-file heuristic: a dot in the last segment is read as an
        # extension, so "/docs/v1.2" is treated as an asset too.
        return "." in last


def build_bypass_rules(settings: Settings) -> BypassRules:
    return BypassRules(
        internal_prefixes=frozenset(settings.internal_path_prefixes),
        api_prefix=settings.api_path_prefix,
        favicon_name=settings.favicon_name,
    )


@dataclass(frozen=True)
class RedirectTarget:
    path: str
    query: str = ""

    @property
    def url_path(self) -> str:
        """Path plus query, as it would appear after the host."""
        return f"{self.path}?{self.query}" if self.query else self.path


@dataclass(frozen=True)
class RoutingDecision:
    action: RouteAction
    target: RedirectTarget | None = None
    # Prefix locale on pass-through, chosen locale on redirect
    locale: Locale | None = None

    @classmethod
    def bypass(cls) -> RoutingDecision:
        return cls(RouteAction.BYPASS)

    @classmethod
    def pass_through(cls, locale: Locale) -> RoutingDecision:
        return cls(RouteAction.PASS_THROUGH, locale=locale)

    @classmethod
    def redirect(cls, target: RedirectTarget, locale: Locale) -> RoutingDecision:
        return cls(RouteAction.REDIRECT, target, locale)


def normalize_path(path: str | None) -> str:
    """Coerce an empty or relative path into an absolute one."""
    if not path:
        return "/"
    if not path.startswith("/"):
        return f"/{path}"
    return path


def _first_segment(path: str) -> str:
    return path[1:].split("/", 1)[0]


def has_locale_prefix(path: str, registry: LocaleRegistry) -> bool:
    """True when the first segment is exactly a served locale code.

    "/ka" and "/ka/..." match, "/kazakhstan" does not.
    """
    return _first_segment(normalize_path(path)) in registry.codes


def locale_from_path(path: str, registry: LocaleRegistry) -> Locale | None:
    """Return the locale named by the path prefix, if any."""
    return registry.parse(_first_segment(normalize_path(path)))


def classify(path: str, registry: LocaleRegistry, rules: BypassRules) -> PathKind:
    path = normalize_path(path)
    if rules.matches(path):
        return PathKind.BYPASS
    if has_locale_prefix(path, registry):
        return PathKind.HAS_LOCALE
    return PathKind.NEEDS_LOCALE


def resolve_locale(stored_preference: str | None, registry: LocaleRegistry) -> Locale:
    """Return the stored preference when it is a served locale, else the default."""
    return registry.parse(stored_preference) or registry.default


def build_redirect_target(original_path: str, original_query: str, locale: Locale) -> RedirectTarget:
    original_path = normalize_path(original_path)
    if original_path == "/":
        return RedirectTarget(path=f"/{locale.value}", query=original_query)
    return RedirectTarget(path=f"/{locale.value}{original_path}", query=original_query)


def decide_route(
    path: str,
    query: str,
    stored_preference: str | None,
    registry: LocaleRegistry,
    rules: BypassRules,
    encoded_path: str | None = None,
) -> RoutingDecision:
    """Compute the routing decision for one request.

    ``path`` is the decoded path and drives classification. ``encoded_path``
    is the path as sent on the wire; when given, the redirect target is
    built from it so percent-escapes such as ``%3F`` survive the redirect.
    The preference is only consulted when the path needs a locale.
    """
    kind = classify(path, registry, rules)
    if kind is PathKind.BYPASS:
        return RoutingDecision.bypass()
    if kind is PathKind.HAS_LOCALE:
        return RoutingDecision.pass_through(locale_from_path(path, registry))

    locale = resolve_locale(stored_preference, registry)
    target = build_redirect_target(encoded_path or path, query, locale)
    return RoutingDecision.redirect(target, locale)


def swap_locale(path: str, new_locale: Locale, registry: LocaleRegistry) -> str:
    """Rewrite ``path`` so it is served in ``new_locale``.

    Replaces an existing locale prefix, or adds one when the path has none.
    """
    path = normalize_path(path)
    if has_locale_prefix(path, registry):
        rest = path[1:].split("/", 1)
        tail = f"/{rest[1]}" if len(rest) > 1 else ""
        return f"/{new_locale.value}{tail}"
    return build_redirect_target(path, "", new_locale).path
