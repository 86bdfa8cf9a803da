"""
HolidayPilot Jurisdiction Packs

Schema validation and loading for jurisdiction packs.

Jurisdiction packs are YAML or JSON files that declare one jurisdiction's
parent link, time zone, substitution policy and holiday rules. The bundled
packs live in packs/data/.

Usage:
    from holidaypilot.packs import load_default_catalog, CatalogLoader

    registry = load_default_catalog()
    registry.compute("CA-NT", 2021)

    loader = CatalogLoader()
    loader.load("path/to/canada.yaml")
    loader.load("path/to/nova_scotia.yaml")
    registry = loader.build()
"""
from __future__ import annotations

from .loader import (
    CatalogLoader,
    load_catalog,
    load_catalog_from_dicts,
    load_default_catalog,
)
from .schema import (
    SCHEMA_VERSION,
    AnchorOffsetRuleSchema,
    FixedRuleSchema,
    HolidaySchema,
    JurisdictionPackSchema,
    LastWeekdayOnOrBeforeRuleSchema,
    NthWeekdayRuleSchema,
    SubstitutionSchema,
    check_schema_version,
    validate_jurisdiction_pack,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "CatalogLoader",
    "load_catalog",
    "load_catalog_from_dicts",
    "load_default_catalog",
    # Validation
    "validate_jurisdiction_pack",
    "check_schema_version",
    # Schemas
    "JurisdictionPackSchema",
    "HolidaySchema",
    "SubstitutionSchema",
    "FixedRuleSchema",
    "NthWeekdayRuleSchema",
    "LastWeekdayOnOrBeforeRuleSchema",
    "AnchorOffsetRuleSchema",
]
