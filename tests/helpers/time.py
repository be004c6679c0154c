"""Shared, deterministic timestamps for tests."""

from datetime import UTC, datetime, timedelta


# Fixed headline publication time so recency values are reproducible.
FIXED_NOW = datetime(2025, 6, 13, 9, 0, 0, tzinfo=UTC)


def days_before(days: float) -> datetime:
    """Return FIXED_NOW shifted back by a number of days."""
    return FIXED_NOW - timedelta(days=days)
