"""Shared utility functions used across modules."""

from __future__ import annotations

from datetime import datetime


def timestamp_now() -> str:
    """Return the current local time as an ISO 8601 string with its UTC offset."""
    return datetime.now().astimezone().isoformat()
