# src/stackit/db/time.py
"""Timestamp helpers shared by models and services."""

from datetime import UTC, datetime, timedelta


def utcnow() -> datetime:
    """Current time in UTC, timezone-aware; the default for every timestamp column."""
    return datetime.now(UTC)


def days_ago(days: int) -> datetime:
    """Return the UTC instant ``days`` days before now."""
    return utcnow() - timedelta(days=days)
