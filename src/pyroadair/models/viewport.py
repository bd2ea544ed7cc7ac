"""Viewport state model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ViewportState(BaseModel):
    """Visible map region.

    The query radius is always derived from the other fields through
    :attr:`query_radius_meters`; it is never stored.

    Parameters
    ----------
    latitude, longitude : float
        Viewport centre in degrees.
    zoom : float
        Web Mercator zoom level.
    pixel_width, pixel_height : int
        Viewport size in pixels.  ``0`` until the renderer reports a size.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    zoom: float
    pixel_width: int = Field(default=0, ge=0)
    pixel_height: int = Field(default=0, ge=0)

    @property
    def query_radius_meters(self) -> int:
        """Backend query radius for this viewport (``0`` means no query)."""
        # Import lazily: geometry depends on the road models of this package.
        from pyroadair.geometry import compute_query_radius

        return compute_query_radius(self.latitude, self.zoom, self.pixel_width, self.pixel_height)

    def with_center(self, latitude: float, longitude: float) -> ViewportState:
        return self._replace(latitude=latitude, longitude=longitude)

    def with_size(self, pixel_width: int, pixel_height: int) -> ViewportState:
        return self._replace(pixel_width=pixel_width, pixel_height=pixel_height)

    def _replace(self, **changes: float) -> ViewportState:
        # model_copy skips validation.
        return ViewportState.model_validate({**self.model_dump(), **changes})
