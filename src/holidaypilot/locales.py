"""
Locale Resolution

Resolves display names through a fallback chain:
region-specific -> language-generic -> default locale -> default language.

    resolver = LocaleResolver(default_locale="en_US")
    resolver.chain("fr_CA")   # ["fr_CA", "fr", "en_US", "en"]
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .config import HP_DEFAULT_LOCALE
from .exceptions import UnknownLocaleError

logger = logging.getLogger(__name__)


KNOWN_LOCALES: frozenset[str] = frozenset({
    "cs", "cs_CZ",
    "da", "da_DK",
    "de", "de_AT", "de_CH", "de_DE",
    "el", "el_GR",
    "en", "en_AU", "en_CA", "en_GB", "en_IE", "en_NZ", "en_US", "en_ZA",
    "es", "es_ES", "es_MX",
    "fi", "fi_FI",
    "fr", "fr_BE", "fr_CA", "fr_CH", "fr_FR",
    "hu", "hu_HU",
    "it", "it_CH", "it_IT",
    "iu", "iu_CA",
    "ja", "ja_JP",
    "ko", "ko_KR",
    "nb", "nb_NO",
    "nl", "nl_BE", "nl_NL",
    "pl", "pl_PL",
    "pt", "pt_BR", "pt_PT",
    "ro", "ro_RO",
    "ru", "ru_RU",
    "sv", "sv_SE",
    "uk", "uk_UA",
    "zh", "zh_CN", "zh_TW",
})


def normalize_locale(locale: str) -> str:
    """Normalize 'fr-ca' / 'FR_CA' style codes to 'fr_CA'."""
    parts = locale.strip().replace("-", "_").split("_")
    language = parts[0].lower()
    if len(parts) == 1:
        return language
    return f"{language}_{parts[1].upper()}"


@dataclass(frozen=True)
class LocaleResolver:
    """
    Locale fallback configuration.

    Attributes:
        default_locale: Locale used when the requested one has no entry
        known_locales: Locales that may be requested
    """
    default_locale: str = HP_DEFAULT_LOCALE
    known_locales: frozenset[str] = KNOWN_LOCALES

    def __post_init__(self) -> None:
        default = normalize_locale(self.default_locale)
        object.__setattr__(self, "default_locale", default)
        object.__setattr__(
            self, "known_locales", frozenset(self.known_locales) | {default}
        )

    def chain(self, locale: Optional[str] = None) -> list[str]:
        """
        Build the fallback chain for a locale.

        Raises:
            UnknownLocaleError: If the locale is not a known locale
        """
        requested = normalize_locale(locale) if locale else self.default_locale
        if requested not in self.known_locales:
            raise UnknownLocaleError(
                message=f"Unknown locale: {locale}",
                details={"locale": locale, "default_locale": self.default_locale},
            )

        candidates = [
            requested,
            requested.split("_")[0],
            self.default_locale,
            self.default_locale.split("_")[0],
        ]
        chain: list[str] = []
        for candidate in candidates:
            if candidate not in chain:
                chain.append(candidate)
        return chain

    def resolve(self, names: Mapping[str, str], locale: Optional[str] = None) -> Optional[str]:
        """
        Pick the best display name for a locale.

        Returns:
            The translated name, or None when no chain entry is present
        """
        for candidate in self.chain(locale):
            if candidate in names:
                return names[candidate]
        logger.debug("No translation for %s among %s", locale, sorted(names))
        return None


DEFAULT_RESOLVER = LocaleResolver()
