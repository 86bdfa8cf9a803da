"""
HolidayPilot Jurisdiction Pack Schemas

Pydantic models for validating jurisdiction pack YAML/JSON files.

A pack declares one jurisdiction: its parent link, time zone, weekend,
substitution policy and holiday rule descriptors. The schemas map to the
domain models in holidaypilot.models.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check major version compatibility
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator

from ..calendars import NAMED_ANCHORS


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

WeekdayName = Literal[
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
]

HolidayTypeValue = Literal["official", "observance", "other"]

ShiftStrategyValue = Literal["next_non_trigger", "nearest_weekday"]


def _lower(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


# =============================================================================
# Date Rule Schemas
# =============================================================================

class FixedRuleSchema(BaseModel):
    """{kind: fixed, month: 7, day: 1}"""
    kind: Literal["fixed"]
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)

    model_config = {"extra": "forbid"}


class NthWeekdayRuleSchema(BaseModel):
    """{kind: nth_weekday, month: 8, weekday: monday, ordinal: 1}"""
    kind: Literal["nth_weekday"]
    month: int = Field(..., ge=1, le=12)
    weekday: WeekdayName
    ordinal: Union[int, Literal["last"]] = Field(..., description="1-5 or 'last'")

    model_config = {"extra": "forbid"}

    @field_validator("weekday", mode="before")
    @classmethod
    def normalize_weekday(cls, v: Any) -> Any:
        return _lower(v)

    @field_validator("ordinal")
    @classmethod
    def validate_ordinal(cls, v: Union[int, str]) -> Union[int, str]:
        if isinstance(v, int) and not 1 <= v <= 5:
            raise ValueError("ordinal must be between 1 and 5, or 'last'")
        return v


class LastWeekdayOnOrBeforeRuleSchema(BaseModel):
    """{kind: last_weekday_on_or_before, month: 5, day: 24, weekday: monday}"""
    kind: Literal["last_weekday_on_or_before"]
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)
    weekday: WeekdayName

    model_config = {"extra": "forbid"}

    @field_validator("weekday", mode="before")
    @classmethod
    def normalize_weekday(cls, v: Any) -> Any:
        return _lower(v)


class AnchorOffsetRuleSchema(BaseModel):
    """
    {kind: anchor_offset, anchor: easter, offset: -2}

    The anchor may also be a nested rule:
    {kind: anchor_offset, anchor: {kind: fixed, month: 12, day: 25}, offset: 1}
    """
    kind: Literal["anchor_offset"]
    anchor: Union[
        str,
        FixedRuleSchema,
        NthWeekdayRuleSchema,
        LastWeekdayOnOrBeforeRuleSchema,
        "AnchorOffsetRuleSchema",
    ]
    offset: int = 0

    model_config = {"extra": "forbid"}

    @field_validator("anchor")
    @classmethod
    def validate_anchor(cls, v: Any) -> Any:
        if isinstance(v, str) and v not in NAMED_ANCHORS:
            raise ValueError(
                f"unknown anchor '{v}', expected one of {sorted(NAMED_ANCHORS)}"
            )
        return v


AnchorOffsetRuleSchema.model_rebuild()

RuleSchema = Union[
    FixedRuleSchema,
    NthWeekdayRuleSchema,
    LastWeekdayOnOrBeforeRuleSchema,
    AnchorOffsetRuleSchema,
]


# =============================================================================
# Holiday and Substitution Schemas
# =============================================================================

class HolidaySchema(BaseModel):
    """Schema for one holiday rule descriptor."""
    key: str = Field(..., min_length=1, description="Stable holiday key (e.g., 'victoriaDay')")
    names: dict[str, str] = Field(..., description="Locale code -> display name")
    rule: RuleSchema = Field(..., discriminator="kind")
    valid_from: Optional[int] = Field(None, description="First year (inclusive)")
    valid_until: Optional[int] = Field(None, description="First year no longer valid (exclusive)")
    observed: bool = Field(False, description="Eligible for weekend substitution")
    type: HolidayTypeValue = "official"
    description: Optional[str] = None

    model_config = {"extra": "forbid"}

    @field_validator("names")
    @classmethod
    def validate_names(cls, v: dict[str, str]) -> dict[str, str]:
        if not v:
            raise ValueError("at least one name is required")
        for locale, name in v.items():
            if not name:
                raise ValueError(f"name for locale '{locale}' is empty")
        return v

    @model_validator(mode="after")
    def validate_window(self) -> "HolidaySchema":
        if (
            self.valid_from is not None
            and self.valid_until is not None
            and self.valid_until <= self.valid_from
        ):
            raise ValueError("valid_until must be after valid_from")
        return self


class SubstitutionSchema(BaseModel):
    """
    Schema for a jurisdiction's substitution policy.

    Without explicit triggers the pack's weekend_days trigger substitution.
    """
    triggers: Optional[Annotated[list[WeekdayName], Field(min_length=1, max_length=6)]] = None
    strategy: ShiftStrategyValue = "next_non_trigger"
    avoid_collisions: bool = True
    key_format: str = "{key}Observed"
    name_templates: Optional[dict[str, str]] = None

    model_config = {"extra": "forbid"}

    @field_validator("triggers", mode="before")
    @classmethod
    def normalize_triggers(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [_lower(day) for day in v]
        return v

    @field_validator("key_format")
    @classmethod
    def validate_key_format(cls, v: str) -> str:
        if "{key}" not in v:
            raise ValueError("key_format must contain '{key}'")
        try:
            v.format(key="x")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"key_format is malformed: {e!r}") from e
        return v


# =============================================================================
# Jurisdiction Pack Schema
# =============================================================================

class JurisdictionPackSchema(BaseModel):
    """
    Top-level schema for a jurisdiction pack YAML/JSON file.
    """
    # Metadata
    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    id: str = Field(..., min_length=1, description="Jurisdiction code (e.g., 'CA-NS')")
    name: str = Field(..., description="Human-readable name")
    parent: Optional[str] = Field(None, description="Parent jurisdiction code")
    description: Optional[str] = None

    # Calendar
    timezone: str = Field(..., description="IANA time zone (e.g., 'America/Halifax')")
    weekend_days: list[WeekdayName] = Field(
        default_factory=lambda: ["saturday", "sunday"]
    )
    substitution: Optional[SubstitutionSchema] = None

    # Rules
    holidays: list[HolidaySchema] = Field(default_factory=list)

    model_config = {
        "extra": "forbid",  # Reject unknown fields
    }

    @field_validator("id", "parent")
    @classmethod
    def normalize_code(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v

    @field_validator("weekend_days", mode="before")
    @classmethod
    def normalize_weekend(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [_lower(day) for day in v]
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown time zone '{v}'") from None
        return v

    @model_validator(mode="after")
    def validate_unique_keys(self) -> "JurisdictionPackSchema":
        seen: set[str] = set()
        for holiday in self.holidays:
            if holiday.key in seen:
                raise ValueError(f"duplicate holiday key '{holiday.key}'")
            seen.add(holiday.key)
        if self.parent and self.parent == self.id:
            raise ValueError("a jurisdiction cannot be its own parent")
        return self


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_jurisdiction_pack(data: dict[str, Any]) -> JurisdictionPackSchema:
    """
    Validate a jurisdiction pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return JurisdictionPackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """Check that a pack's major schema version matches ours."""
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    pack_major = pack_version.split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return pack_major == current_major
