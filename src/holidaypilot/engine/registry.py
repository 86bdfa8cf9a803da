"""
HolidayPilot Jurisdiction Registry

Central lookup of jurisdiction providers by code.

Usage:
    registry = JurisdictionRegistry()
    registry.register(canada)
    registry.register(nova_scotia)

    collection = registry.compute("CA-NS", 2021)
    rows = registry.holidays("CA-NS", 2021, locale="fr_CA")
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import JurisdictionNotFoundError
from ..locales import LocaleResolver
from ..models import HolidayCollection
from .provider import JurisdictionProvider

logger = logging.getLogger(__name__)


@dataclass
class JurisdictionRegistry:
    """Registered providers keyed by jurisdiction code (case-insensitive)."""

    _providers: dict[str, JurisdictionProvider] = field(default_factory=dict)

    def register(self, provider: JurisdictionProvider) -> JurisdictionProvider:
        """Register a provider, replacing one with the same code."""
        key = provider.id.upper()
        if key in self._providers:
            logger.info("Replacing provider for %s", provider.id)
        self._providers[key] = provider
        return provider

    def get(self, jurisdiction_id: str) -> Optional[JurisdictionProvider]:
        return self._providers.get(jurisdiction_id.upper())

    def get_or_raise(self, jurisdiction_id: str) -> JurisdictionProvider:
        """
        Get a provider by code, raising if not found.

        Raises:
            JurisdictionNotFoundError: If the code is not registered
        """
        provider = self.get(jurisdiction_id)
        if provider is None:
            raise JurisdictionNotFoundError(
                message=f"Jurisdiction not found: {jurisdiction_id}",
                details={"available": self.list_ids()},
                jurisdiction=jurisdiction_id,
            )
        return provider

    def __contains__(self, jurisdiction_id: object) -> bool:
        return isinstance(jurisdiction_id, str) and jurisdiction_id.upper() in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def list_ids(self) -> list[str]:
        return sorted(p.id for p in self._providers.values())

    def children_of(self, jurisdiction_id: str) -> list[str]:
        """Codes of providers whose direct parent is jurisdiction_id."""
        parent = jurisdiction_id.upper()
        return sorted(
            p.id for p in self._providers.values()
            if p.parent is not None and p.parent.id.upper() == parent
        )

    def compute(self, jurisdiction_id: str, year: int) -> HolidayCollection:
        return self.get_or_raise(jurisdiction_id).compute(year)

    def holidays(
        self,
        jurisdiction_id: str,
        year: int,
        locale: Optional[str] = None,
        resolver: Optional[LocaleResolver] = None,
    ) -> list[dict[str, Any]]:
        """
        Compute holidays and resolve display names.

        Returns:
            Rows of key, ISO date, name, names, type (and substitutes)
        """
        return self.compute(jurisdiction_id, year).to_list(locale, resolver)
