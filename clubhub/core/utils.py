"""
Shared utility functions for the club platform.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone


def generate_id(prefix: str = "") -> str:
    """
    Generate a unique opaque ID with optional prefix.

    Used for token identifiers; entity ids are integers assigned by storage.
    """
    uid = uuid.uuid4().hex[:12]
    return f"{prefix}_{uid}" if prefix else uid


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get the current UTC calendar date."""
    return utc_now().date()


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
