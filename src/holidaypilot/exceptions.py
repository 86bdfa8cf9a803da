"""
HolidayPilot Exception Hierarchy

Domain-specific exceptions for holiday computation.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: HP_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class HolidayPilotError(Exception):
    """
    Base exception for all HolidayPilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (HP_*)
        details: Additional context about the error
        jurisdiction: Associated jurisdiction ID if applicable
    """
    message: str
    code: str = "HP_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    jurisdiction: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.jurisdiction:
            parts.append(f"(jurisdiction: {self.jurisdiction})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.jurisdiction:
            result["jurisdiction"] = self.jurisdiction
        return result


# =============================================================================
# Computation Errors
# =============================================================================

@dataclass
class InvalidYearError(HolidayPilotError):
    """Requested year is outside the supported range."""
    code: str = "HP_INVALID_YEAR"


@dataclass
class NoSuchDateError(HolidayPilotError):
    """A date rule has no valid date for the requested year."""
    code: str = "HP_NO_SUCH_DATE"


@dataclass
class InvalidRuleError(HolidayPilotError):
    """Rule descriptor or date rule is malformed."""
    code: str = "HP_INVALID_RULE"


@dataclass
class InvalidTimezoneError(HolidayPilotError):
    """Time zone identifier is not a known IANA zone."""
    code: str = "HP_INVALID_TIMEZONE"


# =============================================================================
# Collection Errors
# =============================================================================

@dataclass
class DuplicateHolidayError(HolidayPilotError):
    """Holiday key already present where duplicates are rejected."""
    code: str = "HP_DUPLICATE_HOLIDAY"


@dataclass
class CollectionFrozenError(HolidayPilotError):
    """Attempted to modify a finalized holiday collection."""
    code: str = "HP_COLLECTION_FROZEN"


# =============================================================================
# Locale Errors
# =============================================================================

@dataclass
class UnknownLocaleError(HolidayPilotError):
    """Requested locale has no configured fallback chain."""
    code: str = "HP_UNKNOWN_LOCALE"


# =============================================================================
# Catalog Errors
# =============================================================================

@dataclass
class JurisdictionNotFoundError(HolidayPilotError):
    """Requested jurisdiction is not registered."""
    code: str = "HP_JURISDICTION_NOT_FOUND"


@dataclass
class CatalogLoadError(HolidayPilotError):
    """Failed to load a jurisdiction pack from file."""
    code: str = "HP_CATALOG_LOAD_ERROR"


@dataclass
class CatalogValidationError(HolidayPilotError):
    """Jurisdiction pack validation failed."""
    code: str = "HP_CATALOG_VALIDATION_ERROR"


@dataclass
class CatalogVersionMismatch(HolidayPilotError):
    """Pack schema version doesn't match the supported version."""
    code: str = "HP_CATALOG_VERSION_MISMATCH"
