"""
HolidayPilot Holiday Record

One computed holiday occurrence for a jurisdiction-year.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from types import MappingProxyType
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo

from ..locales import DEFAULT_RESOLVER, LocaleResolver
from .enums import HolidayType


@dataclass(frozen=True)
class HolidayRecord:
    """
    An immutable holiday occurrence.

    Attributes:
        key: Identifier, unique within a jurisdiction-year
        year: Calendar year the record belongs to
        date: Civil date of the holiday
        names: Locale code -> display name
        type: Holiday classification
        observed: Eligible for weekend substitution
        substitutes: Key of the substituted holiday (substitute records only)
        timezone: IANA zone the date is anchored to
    """
    key: str
    year: int
    date: date
    names: Mapping[str, str] = field(hash=False)
    type: HolidayType = HolidayType.OFFICIAL
    observed: bool = False
    substitutes: Optional[str] = None
    timezone: str = "UTC"

    def __post_init__(self) -> None:
        """Validate record invariants."""
        if not self.key:
            raise ValueError("Holiday record requires a key")
        if not self.names:
            raise ValueError(f"Holiday '{self.key}' requires at least one name")
        if self.date.year != self.year:
            raise ValueError(
                f"Holiday '{self.key}' date {self.date.isoformat()} is not in year {self.year}"
            )
        object.__setattr__(self, "type", HolidayType(self.type))
        if self.type == HolidayType.SUBSTITUTE and not self.substitutes:
            raise ValueError(f"Substitute holiday '{self.key}' must reference the substituted key")
        if self.type != HolidayType.SUBSTITUTE and self.substitutes:
            raise ValueError(f"Only substitute holidays may reference another key ('{self.key}')")
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))

    @property
    def start(self) -> datetime:
        """Midnight local time in the jurisdiction's zone."""
        return datetime.combine(self.date, time.min, tzinfo=ZoneInfo(self.timezone))

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()

    @property
    def weekday(self) -> int:
        return self.date.weekday()

    @property
    def is_substitute(self) -> bool:
        return self.type == HolidayType.SUBSTITUTE

    def get_name(
        self,
        locale: Optional[str] = None,
        resolver: Optional[LocaleResolver] = None,
    ) -> str:
        """
        Display name for a locale, following the resolver's fallback chain.

        Falls back to the key when no chain entry has a translation.

        Raises:
            UnknownLocaleError: If the locale is not known to the resolver
        """
        resolver = resolver or DEFAULT_RESOLVER
        return resolver.resolve(self.names, locale) or self.key

    def to_dict(
        self,
        locale: Optional[str] = None,
        resolver: Optional[LocaleResolver] = None,
    ) -> dict[str, Any]:
        """Serialize for output, with the name resolved for locale."""
        result: dict[str, Any] = {
            "key": self.key,
            "date": self.iso_date,
            "name": self.get_name(locale, resolver),
            "names": dict(self.names),
            "type": self.type.value,
        }
        if self.substitutes:
            result["substitutes"] = self.substitutes
        return result
