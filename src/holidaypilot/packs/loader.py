"""
HolidayPilot Jurisdiction Pack Loader

Loads and validates jurisdiction packs from YAML or JSON files.

Converts Pydantic schema models to HolidayPilot domain models and links
each jurisdiction to its parent provider.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import HP_STRICT_SCHEMA_VERSION, catalog_dir
from ..engine import JurisdictionProvider, JurisdictionRegistry
from ..exceptions import (
    CatalogLoadError,
    CatalogValidationError,
    CatalogVersionMismatch,
    HolidayPilotError,
)
from ..models import (
    LAST,
    AnchorOffsetRule,
    DateRule,
    FixedDateRule,
    HolidayType,
    LastWeekdayOnOrBeforeRule,
    NthWeekdayRule,
    RuleDescriptor,
    ShiftStrategy,
    SubstitutionPolicy,
    Weekday,
    weekday_set,
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

logger = logging.getLogger(__name__)


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_rule(schema: Any) -> DateRule:
    """Convert a rule schema to a date rule variant."""
    if isinstance(schema, FixedRuleSchema):
        return FixedDateRule(month=schema.month, day=schema.day)
    if isinstance(schema, NthWeekdayRuleSchema):
        return NthWeekdayRule(
            month=schema.month,
            weekday=Weekday.parse(schema.weekday),
            ordinal=LAST if schema.ordinal == "last" else schema.ordinal,
        )
    if isinstance(schema, LastWeekdayOnOrBeforeRuleSchema):
        return LastWeekdayOnOrBeforeRule(
            month=schema.month,
            day=schema.day,
            weekday=Weekday.parse(schema.weekday),
        )
    if isinstance(schema, AnchorOffsetRuleSchema):
        anchor = schema.anchor if isinstance(schema.anchor, str) else _convert_rule(schema.anchor)
        return AnchorOffsetRule(anchor=anchor, offset_days=schema.offset)
    raise TypeError(f"Unsupported rule schema: {type(schema).__name__}")


def _convert_holiday(schema: HolidaySchema) -> RuleDescriptor:
    """Convert HolidaySchema to RuleDescriptor model."""
    return RuleDescriptor(
        key=schema.key,
        names=schema.names,
        rule=_convert_rule(schema.rule),
        valid_from=schema.valid_from,
        valid_until=schema.valid_until,
        observed=schema.observed,
        type=HolidayType(schema.type),
    )


def _convert_substitution(
    schema: Optional[SubstitutionSchema],
    weekend_days: frozenset[Weekday],
) -> Optional[SubstitutionPolicy]:
    """Convert SubstitutionSchema to SubstitutionPolicy model."""
    if schema is None:
        return None
    kwargs: dict[str, Any] = {
        "triggers": weekday_set(schema.triggers) if schema.triggers else weekend_days,
        "strategy": ShiftStrategy(schema.strategy),
        "avoid_collisions": schema.avoid_collisions,
        "key_format": schema.key_format,
    }
    if schema.name_templates is not None:
        kwargs["name_templates"] = schema.name_templates
    return SubstitutionPolicy(**kwargs)


def _build_provider(
    schema: JurisdictionPackSchema,
    parent: Optional[JurisdictionProvider],
) -> JurisdictionProvider:
    """Convert a validated pack into a provider."""
    weekend_days = weekday_set(schema.weekend_days)
    return JurisdictionProvider(
        id=schema.id,
        name=schema.name,
        timezone=schema.timezone,
        rules=[_convert_holiday(h) for h in schema.holidays],
        parent=parent,
        substitution=_convert_substitution(schema.substitution, weekend_days),
        weekend_days=weekend_days,
    )


# =============================================================================
# Catalog Loader
# =============================================================================

class CatalogLoader:
    """
    Loads jurisdiction packs and links them into providers.

    Usage:
        loader = CatalogLoader()
        loader.load_directory("packs/")
        registry = loader.build()
        registry.compute("CA-NS", 2021)
    """

    def __init__(self, strict_version: bool = HP_STRICT_SCHEMA_VERSION):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject packs with incompatible schema versions
        """
        self.strict_version = strict_version
        self._packs: dict[str, JurisdictionPackSchema] = {}
        self._sources: dict[str, str] = {}

    def load(self, path: Union[str, Path]) -> JurisdictionPackSchema:
        """
        Load a jurisdiction pack from a file.

        Raises:
            CatalogLoadError: If file cannot be read
            CatalogValidationError: If validation fails
            CatalogVersionMismatch: If schema version incompatible
        """
        path = Path(path)
        try:
            data = self._load_file(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise CatalogLoadError(
                message=f"Failed to load jurisdiction pack: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e
        return self.load_dict(data, source=str(path))

    def load_dict(self, data: Any, source: str = "<dict>") -> JurisdictionPackSchema:
        """Validate and register a pack given as a dictionary."""
        if not isinstance(data, dict):
            raise CatalogLoadError(
                message="Jurisdiction pack must be a mapping",
                details={"source": source, "type": type(data).__name__},
            )

        if self.strict_version and not check_schema_version(data):
            pack_version = data.get("schema_version", "unknown")
            raise CatalogVersionMismatch(
                message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
                details={
                    "pack_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                    "source": source,
                },
            )

        try:
            schema = validate_jurisdiction_pack(data)
        except ValidationError as e:
            raise CatalogValidationError(
                message=f"Jurisdiction pack validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "source": source},
                jurisdiction=data.get("id"),
            ) from e

        if schema.id in self._packs:
            raise CatalogValidationError(
                message=f"Jurisdiction '{schema.id}' is defined twice",
                details={"sources": [self._sources[schema.id], source]},
                jurisdiction=schema.id,
            )

        self._packs[schema.id] = schema
        self._sources[schema.id] = source
        logger.debug("Loaded pack %s from %s", schema.id, source)
        return schema

    def load_string(self, content: str, format: str = "yaml") -> JurisdictionPackSchema:
        """Load a pack from a YAML or JSON string."""
        try:
            if format.lower() == "json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise CatalogLoadError(
                message=f"Failed to parse jurisdiction pack: {e}",
                details={"format": format, "error": str(e)},
            ) from e
        return self.load_dict(data, source=f"<{format}>")

    def load_directory(self, directory: Union[str, Path]) -> list[JurisdictionPackSchema]:
        """
        Load all *.yaml, *.yml and *.json packs of a directory.

        Raises:
            CatalogLoadError: If the directory does not exist
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise CatalogLoadError(
                message=f"Directory not found: {directory}",
                details={"path": str(directory)},
            )

        paths = sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in {".yaml", ".yml", ".json"}
        )
        return [self.load(path) for path in paths]

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)

    def list_packs(self) -> list[str]:
        """IDs of all loaded packs."""
        return sorted(self._packs)

    def build(self, registry: Optional[JurisdictionRegistry] = None) -> JurisdictionRegistry:
        """
        Build providers for all loaded packs, parents before children.

        Raises:
            CatalogValidationError: On unknown parents or parent cycles
        """
        registry = registry if registry is not None else JurisdictionRegistry()
        built: dict[str, JurisdictionProvider] = {}
        for pack_id in sorted(self._packs):
            self._build_one(pack_id, built, visiting=[])
        for pack_id in sorted(built):
            registry.register(built[pack_id])
        logger.info("Built %d jurisdictions", len(built))
        return registry

    def _build_one(
        self,
        pack_id: str,
        built: dict[str, JurisdictionProvider],
        visiting: list[str],
    ) -> JurisdictionProvider:
        if pack_id in built:
            return built[pack_id]
        if pack_id in visiting:
            raise CatalogValidationError(
                message=f"Parent cycle: {' -> '.join(visiting + [pack_id])}",
                details={"cycle": visiting + [pack_id]},
                jurisdiction=pack_id,
            )

        schema = self._packs[pack_id]
        parent = None
        if schema.parent:
            if schema.parent not in self._packs:
                raise CatalogValidationError(
                    message=f"Unknown parent jurisdiction '{schema.parent}'",
                    details={"parent": schema.parent, "source": self._sources[pack_id]},
                    jurisdiction=pack_id,
                )
            parent = self._build_one(schema.parent, built, visiting + [pack_id])

        try:
            provider = _build_provider(schema, parent)
        except HolidayPilotError as e:
            raise CatalogValidationError(
                message=f"Invalid jurisdiction pack: {e.message}",
                details={"error": e.to_dict(), "source": self._sources[pack_id]},
                jurisdiction=pack_id,
            ) from e

        built[pack_id] = provider
        return provider


# =============================================================================
# Convenience Functions
# =============================================================================

def load_catalog(directory: Union[str, Path]) -> JurisdictionRegistry:
    """Load every pack of a directory into a new registry."""
    loader = CatalogLoader()
    loader.load_directory(directory)
    return loader.build()


def load_catalog_from_dicts(packs: Iterable[dict[str, Any]]) -> JurisdictionRegistry:
    """Build a registry from already-parsed pack dictionaries."""
    loader = CatalogLoader()
    for data in packs:
        loader.load_dict(data)
    return loader.build()


def load_default_catalog() -> JurisdictionRegistry:
    """Load the packs from HP_CATALOG_DIR, or the bundled ones."""
    return load_catalog(catalog_dir())
