"""Shared helpers for backend endpoint modules.

It is internal to pyroadair and may change at any time.
"""

from __future__ import annotations

from datetime import UTC, datetime


def build_area_params(latitude: float, longitude: float, radius: int) -> dict[str, str]:
    """Query parameters selecting the circular area around a point."""
    return {
        "lat": repr(float(latitude)),
        "lon": repr(float(longitude)),
        "distancia": str(int(radius)),
    }


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    utc = value.astimezone(UTC)
    return f"{utc.strftime('%Y-%m-%dT%H:%M:%S')}.{utc.microsecond // 1000:03d}Z"
