"""Client configuration for pyroadair."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import Any, Literal

from pyroadair._constants import (
    BASE_URL,
    DEFAULT_TIME,
    INITIAL_LATITUDE,
    INITIAL_LONGITUDE,
    INITIAL_ZOOM,
    MAX_DATE,
    MAX_ZOOM,
    MIN_DATE,
    MIN_ZOOM,
    PLAYBACK_INTERVAL_SECONDS,
)
from pyroadair.exceptions import RoadAirConfigError

SampleAxisOrder = Literal["lat_lon", "lon_lat"]
_AXIS_ORDERS: frozenset[str] = frozenset({"lat_lon", "lon_lat"})


def _parse_datetime(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def _parse_date(value: str) -> date:
    return date.fromisoformat(value.strip())


@dataclasses.dataclass(frozen=True)
class RoadAirConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Backend data service base URL (no trailing slash).
    request_timeout : float
        Total timeout in seconds for a single backend request.
    sample_axis_order : str
        Order of the first two elements of each sample triple on the wire.
        ``"lat_lon"`` (the backend default) or ``"lon_lat"``.
    playback_interval : float
        Seconds between playback ticks.
    default_time : datetime
        Initial time cursor.  Naive values are taken as UTC.
    min_date, max_date : date
        Range accepted by manual date edits.
    initial_latitude, initial_longitude : float
        Initial viewport centre.
    initial_zoom : float
        Initial viewport zoom level.
    min_zoom, max_zoom : float
        Zoom bounds applied to every viewport update.
    """

    base_url: str = BASE_URL
    request_timeout: float = 30.0
    sample_axis_order: SampleAxisOrder = "lat_lon"
    playback_interval: float = PLAYBACK_INTERVAL_SECONDS
    default_time: datetime = DEFAULT_TIME
    min_date: date = MIN_DATE
    max_date: date = MAX_DATE
    initial_latitude: float = INITIAL_LATITUDE
    initial_longitude: float = INITIAL_LONGITUDE
    initial_zoom: float = INITIAL_ZOOM
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM

    def __post_init__(self) -> None:
        if self.sample_axis_order not in _AXIS_ORDERS:
            raise RoadAirConfigError(
                f"sample_axis_order must be one of {sorted(_AXIS_ORDERS)}, got {self.sample_axis_order!r}"
            )
        if self.playback_interval <= 0:
            raise RoadAirConfigError(f"playback_interval must be positive, got {self.playback_interval}")
        if self.request_timeout <= 0:
            raise RoadAirConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.min_date > self.max_date:
            raise RoadAirConfigError(f"min_date {self.min_date} is after max_date {self.max_date}")
        if self.min_zoom > self.max_zoom:
            raise RoadAirConfigError(f"min_zoom {self.min_zoom} is above max_zoom {self.max_zoom}")
        if self.default_time.tzinfo is None:
            # Frozen dataclass: normalise through object.__setattr__.
            object.__setattr__(self, "default_time", self.default_time.replace(tzinfo=UTC))
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> RoadAirConfig:
        """Create configuration from environment variables.

        Reads optional ``ROADAIR_*`` variables.  Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        RoadAirConfig
            Populated configuration.

        Raises
        ------
        RoadAirConfigError
            If an environment value cannot be parsed.
        """
        env = os.environ

        _ENV_CONFIG_MAP: dict[str, tuple[str, Callable[[str], Any]]] = {
            "ROADAIR_BASE_URL": ("base_url", str),
            "ROADAIR_REQUEST_TIMEOUT": ("request_timeout", float),
            "ROADAIR_SAMPLE_AXIS_ORDER": ("sample_axis_order", str),
            "ROADAIR_PLAYBACK_INTERVAL": ("playback_interval", float),
            "ROADAIR_DEFAULT_TIME": ("default_time", _parse_datetime),
            "ROADAIR_MIN_DATE": ("min_date", _parse_date),
            "ROADAIR_MAX_DATE": ("max_date", _parse_date),
            "ROADAIR_INITIAL_LATITUDE": ("initial_latitude", float),
            "ROADAIR_INITIAL_LONGITUDE": ("initial_longitude", float),
            "ROADAIR_INITIAL_ZOOM": ("initial_zoom", float),
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, (field_name, parse) in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = parse(val)
            except ValueError as exc:
                raise RoadAirConfigError(f"Invalid value for {env_key}: {val!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
