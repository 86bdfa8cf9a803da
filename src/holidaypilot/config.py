"""
HolidayPilot Configuration

Environment-driven settings and logging setup.

Settings:
    HP_DEFAULT_LOCALE         Fallback locale for display names (default: en_US)
    HP_LOG_LEVEL              Log level for the holidaypilot logger (default: INFO)
    HP_CATALOG_DIR            Directory of jurisdiction packs (default: bundled packs)
    HP_STRICT_SCHEMA_VERSION  Reject packs with another schema version (default: true)
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

HP_DEFAULT_LOCALE = os.getenv("HP_DEFAULT_LOCALE", "en_US")
HP_LOG_LEVEL = os.getenv("HP_LOG_LEVEL", "INFO")
HP_CATALOG_DIR = os.getenv("HP_CATALOG_DIR")
HP_STRICT_SCHEMA_VERSION = os.getenv("HP_STRICT_SCHEMA_VERSION", "true").lower() == "true"

BUNDLED_CATALOG_DIR = Path(__file__).parent / "packs" / "data"

# Python's date type bounds the supported range
MIN_YEAR = 1
MAX_YEAR = 9999


def catalog_dir() -> Path:
    """Directory the default catalog is loaded from."""
    if HP_CATALOG_DIR:
        return Path(HP_CATALOG_DIR)
    return BUNDLED_CATALOG_DIR


# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Add extra fields if present
        if hasattr(record, "jurisdiction"):
            log_entry["jurisdiction"] = record.jurisdiction
        if hasattr(record, "year"):
            log_entry["year"] = record.year
        if hasattr(record, "holiday_key"):
            log_entry["holiday_key"] = record.holiday_key
        return json.dumps(log_entry)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a JSON stream handler to the holidaypilot logger.

    Calling it again replaces the handler instead of stacking a second one.
    """
    logger = logging.getLogger("holidaypilot")
    logger.setLevel(getattr(logging, (level or HP_LOG_LEVEL).upper()))
    for existing in list(logger.handlers):
        if isinstance(existing.formatter, JSONFormatter):
            logger.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    return logger
