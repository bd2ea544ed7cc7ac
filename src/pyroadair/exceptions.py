"""Custom exception hierarchy for pyroadair."""

from __future__ import annotations


class RoadAirError(Exception):
    """Base exception for all pyroadair errors."""


class RoadAirConfigError(RoadAirError):
    """Invalid or missing configuration."""


class RoadAirTransportError(RoadAirError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class RoadAirDataError(RoadAirError):
    """Backend returned a body that does not have the expected shape.

    Covers ``null`` bodies, a wrong top-level type and entries that fail
    model validation.  The load that received it is aborted as a whole.
    """

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class InvalidGeometryError(RoadAirError):
    """Road geometry has too few points to derive a representative point.

    The join recovers from this by leaving the road out of the value map.
    """

    def __init__(self, message: str, *, road_id: str | None = None) -> None:
        self.road_id = road_id
        super().__init__(message)
