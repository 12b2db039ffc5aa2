"""
Locale registry and helpers

- ``Locale``: closed enumeration of the languages the site is published in
- ``LocaleRegistry``: the immutable set of served locales plus the default
- Language metadata lookup for language pickers
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from legalhub.exceptions import LocaleConfigurationError

if TYPE_CHECKING:
    from legalhub.config import Settings


class Locale(str, Enum):
    KA = "ka"
    EN = "en"
    RU = "ru"

    @classmethod
    def parse(cls, raw: str | None) -> Locale | None:
        """Return the matching locale, or None for anything that is not an exact code.

        Matching is case-sensitive: stored values are written by the site
        itself, so "EN" is treated as foreign input rather than guessed at.
        """
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


# ── Constants ─────────────────────────────────────────────────────────────────

# Native names shown in the language picker
LANGUAGE_NAMES: dict[Locale, str] = {
    Locale.KA: "ქართული",
    Locale.EN: "English",
    Locale.RU: "Русский",
}

# Short labels for the header switcher button
LANGUAGE_LABELS: dict[Locale, str] = {
    Locale.KA: "KA",
    Locale.EN: "EN",
    Locale.RU: "RU",
}


# ── Registry ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LocaleRegistry:
    """Ordered set of served locales with exactly one default.

    Built once at startup and shared read-only by every request.
    """

    locales: tuple[Locale, ...]
    default: Locale

    def __post_init__(self) -> None:
        if not self.locales:
            raise LocaleConfigurationError("At least one locale must be supported")
        if len(set(self.locales)) != len(self.locales):
            raise LocaleConfigurationError(
                "Supported locales contain duplicates",
                details={"supported_locales": [locale.value for locale in self.locales]},
            )
        if self.default not in self.locales:
            raise LocaleConfigurationError(
                f"Default locale '{self.default.value}' is not in the supported locales",
                details={
                    "default_locale": self.default.value,
                    "supported_locales": [locale.value for locale in self.locales],
                },
            )

    @classmethod
    def from_codes(cls, codes: Iterable[str], default: str) -> LocaleRegistry:
        """Build a registry from raw configuration strings."""
        parsed: list[Locale] = []
        for code in codes:
            locale = Locale.parse(code)
            if locale is None:
                raise LocaleConfigurationError(
                    f"Unknown locale code '{code}' in configuration",
                    details={"known_locales": [locale.value for locale in Locale]},
                )
            parsed.append(locale)

        default_locale = Locale.parse(default)
        if default_locale is None:
            raise LocaleConfigurationError(
                f"Unknown default locale '{default}'",
                details={"known_locales": [locale.value for locale in Locale]},
            )
        return cls(locales=tuple(parsed), default=default_locale)

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(locale.value for locale in self.locales)

    def parse(self, raw: str | None) -> Locale | None:
        """Parse ``raw`` and keep it only if this registry serves it."""
        locale = Locale.parse(raw)
        if locale is None or locale not in self.locales:
            return None
        return locale

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Locale):
            return item in self.locales
        if isinstance(item, str):
            return self.parse(item) is not None
        return False

    def __iter__(self) -> Iterator[Locale]:
        return iter(self.locales)


def build_locale_registry(settings: Settings) -> LocaleRegistry:
    """Create the process-wide registry from settings; fails fast on bad config."""
    return LocaleRegistry.from_codes(settings.supported_locales, settings.default_locale)


# ── Public helpers ────────────────────────────────────────────────────────────


def get_language_info(locale: Locale, registry: LocaleRegistry) -> dict[str, str | bool]:
    """Return a metadata dict describing the given locale.

    Args:
        locale:   A served locale.
        registry: Registry used to flag the default locale.

    Returns:
        Dict with keys: ``code``, ``name``, ``label`` (str) and ``is_default`` (bool).
    """
    return {
        "code": locale.value,
        "name": LANGUAGE_NAMES[locale],
        "label": LANGUAGE_LABELS[locale],
        "is_default": locale == registry.default,
    }
