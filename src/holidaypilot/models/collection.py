"""
HolidayPilot Holiday Collection

An ordered, key-unique container of HolidayRecords for one jurisdiction-year.

Records are kept in date order (ties broken by insertion order). A collection
is filled by a provider, extended by the substitution policy and then frozen.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Iterator, Optional

from ..canon import canonical_json, content_hash
from ..exceptions import CollectionFrozenError, DuplicateHolidayError
from ..locales import LocaleResolver
from .enums import HolidayType
from .holiday import HolidayRecord


class HolidayCollection:
    """
    Holidays of one jurisdiction for one year.

    Usage:
        collection = HolidayCollection(year=2021, jurisdiction="CA")
        collection.add(record)          # rejects duplicate keys
        collection.insert(override)     # replaces a record with the same key
        for holiday in collection:      # date ascending
            ...
    """

    def __init__(
        self,
        year: int,
        jurisdiction: Optional[str] = None,
        records: Optional[list[HolidayRecord]] = None,
    ):
        self.year = year
        self.jurisdiction = jurisdiction
        self._records: dict[str, HolidayRecord] = {}
        # Insertion sequence per key, used to break date ties
        self._sequence: dict[str, int] = {}
        self._counter = 0
        self._frozen = False
        for record in records or []:
            self.add(record)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def _check_mutable(self) -> None:
        if self._frozen:
            raise CollectionFrozenError(
                message=f"Holiday collection for {self.year} is finalized",
                jurisdiction=self.jurisdiction,
            )

    def _check_year(self, record: HolidayRecord) -> None:
        if record.year != self.year:
            raise ValueError(
                f"Holiday '{record.key}' belongs to {record.year}, collection is for {self.year}"
            )

    def add(self, record: HolidayRecord) -> None:
        """
        Add a record whose key must not be present yet.

        Raises:
            DuplicateHolidayError: If the key already exists
        """
        self._check_mutable()
        self._check_year(record)
        if record.key in self._records:
            raise DuplicateHolidayError(
                message=f"Holiday '{record.key}' already exists for {self.year}",
                details={"key": record.key, "year": self.year},
                jurisdiction=self.jurisdiction,
            )
        self._store(record)

    def insert(self, record: HolidayRecord) -> Optional[HolidayRecord]:
        """
        Insert a record, replacing any record with the same key.

        Returns:
            The replaced record, or None
        """
        self._check_mutable()
        self._check_year(record)
        previous = self._records.get(record.key)
        self._store(record)
        return previous

    def remove(self, key: str) -> Optional[HolidayRecord]:
        """Remove a record by key; returns it, or None if absent."""
        self._check_mutable()
        self._sequence.pop(key, None)
        return self._records.pop(key, None)

    def _store(self, record: HolidayRecord) -> None:
        self._records[record.key] = record
        self._sequence[record.key] = self._counter
        self._counter += 1

    def freeze(self) -> HolidayCollection:
        """Mark the collection read-only."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> HolidayCollection:
        """Unfrozen copy preserving order; records are shared (immutable)."""
        clone = HolidayCollection(year=self.year, jurisdiction=self.jurisdiction)
        for record in self.all():
            clone.add(record)
        return clone

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, key: str) -> Optional[HolidayRecord]:
        return self._records.get(key)

    def contains(self, key: str) -> bool:
        return key in self._records

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def all(self) -> list[HolidayRecord]:
        """All records, date ascending, ties in insertion order."""
        return sorted(
            self._records.values(),
            key=lambda r: (r.date, self._sequence[r.key]),
        )

    def __iter__(self) -> Iterator[HolidayRecord]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return (
            f"HolidayCollection(jurisdiction={self.jurisdiction!r}, "
            f"year={self.year}, holidays={len(self)})"
        )

    def count(self) -> int:
        """Number of distinct holidays; a substitute counts with its original."""
        return len({r.substitutes or r.key for r in self._records.values()})

    def keys(self) -> list[str]:
        return [r.key for r in self.all()]

    def dates(self) -> list[date]:
        return [r.date for r in self.all()]

    def on(self, day: date) -> list[HolidayRecord]:
        """Records falling on a date."""
        return [r for r in self.all() if r.date == day]

    def is_holiday(self, day: date) -> bool:
        return any(r.date == day for r in self._records.values())

    def between(self, start: date, end: date, inclusive: bool = True) -> list[HolidayRecord]:
        """
        Records within a date range.

        Args:
            start: Range start
            end: Range end
            inclusive: Include records on the boundary dates
        """
        if start > end:
            raise ValueError(f"Start date {start} must not be after end date {end}")
        if inclusive:
            return [r for r in self.all() if start <= r.date <= end]
        return [r for r in self.all() if start < r.date < end]

    def by_type(self, holiday_type: HolidayType) -> list[HolidayRecord]:
        holiday_type = HolidayType(holiday_type)
        return [r for r in self.all() if r.type == holiday_type]

    def when_is(self, key: str) -> Optional[date]:
        record = self._records.get(key)
        return record.date if record else None

    def substitute_for(self, key: str) -> Optional[HolidayRecord]:
        """The substitute record referencing key, if any."""
        for record in self._records.values():
            if record.substitutes == key:
                return record
        return None

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def to_list(
        self,
        locale: Optional[str] = None,
        resolver: Optional[LocaleResolver] = None,
    ) -> list[dict[str, Any]]:
        """Ordered output rows with names resolved for locale."""
        return [r.to_dict(locale, resolver) for r in self.all()]

    def to_canonical_json(self) -> str:
        return canonical_json({
            "jurisdiction": self.jurisdiction,
            "year": self.year,
            "holidays": self.to_list(),
        })

    def fingerprint(self) -> str:
        """SHA-256 over the canonical form; equal for equal computations."""
        return content_hash({
            "jurisdiction": self.jurisdiction,
            "year": self.year,
            "holidays": self.to_list(),
        })
