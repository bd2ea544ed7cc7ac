"""Pollutant sample model."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, FiniteFloat


class Sample(BaseModel):
    """One pollutant measurement at a point.

    Parameters
    ----------
    longitude : float
        Longitude in degrees.
    latitude : float
        Latitude in degrees.
    value : float
        Measured concentration.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    longitude: FiniteFloat
    latitude: FiniteFloat
    value: FiniteFloat

    @classmethod
    def from_triple(cls, triple: Any, *, axis_order: str = "lat_lon") -> Sample:
        """Build a sample from a wire triple.

        ``axis_order`` names the order of the first two elements:
        ``"lat_lon"`` for ``[lat, lon, value]``, ``"lon_lat"`` for
        ``[lon, lat, value]``.

        Raises
        ------
        ValueError
            If *triple* is not a three-element sequence.
        pydantic.ValidationError
            If an element is not a finite number.
        """
        if isinstance(triple, (str, bytes)) or not isinstance(triple, Sequence) or len(triple) != 3:
            raise ValueError(f"sample must be a [a, b, value] triple, got {triple!r}")
        first, second, value = triple
        if axis_order == "lat_lon":
            return cls.model_validate({"longitude": second, "latitude": first, "value": value})
        return cls.model_validate({"longitude": first, "latitude": second, "value": value})

    @property
    def position(self) -> tuple[float, float]:
        """``(longitude, latitude)`` of the sample."""
        return (self.longitude, self.latitude)
