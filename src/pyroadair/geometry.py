"""Viewport and road geometry helpers.

* :func:`compute_query_radius` turns a viewport into a backend query radius.
* :func:`centroid` derives a cheap representative point for a road.

The representative point is the midpoint of a line's first and last
vertex, not a true centroid.  Interior vertices are ignored.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pyroadair._constants import EARTH_CIRCUMFERENCE_METERS, QUERY_RADIUS_FACTOR, TILE_SIZE_PX
from pyroadair.exceptions import InvalidGeometryError
from pyroadair.models.road import Line, MultiLine, Position


def meters_per_pixel(latitude: float, zoom: float) -> float:
    """Ground resolution of a Web Mercator pixel at *latitude* and *zoom*."""
    return math.cos(math.radians(latitude)) * EARTH_CIRCUMFERENCE_METERS / (TILE_SIZE_PX * 2**zoom)


def compute_query_radius(latitude: float, zoom: float, pixel_width: int, pixel_height: int) -> int:
    """Return the backend query radius in meters for a viewport.

    The radius is 30% of the shorter visible side, floored.  A viewport
    without a size yet (either dimension ``0``) yields ``0``, which callers
    treat as "no query".

    Parameters
    ----------
    latitude : float
        Latitude of the viewport centre in degrees.
    zoom : float
        Web Mercator zoom level.
    pixel_width, pixel_height : int
        Viewport size in pixels.

    Returns
    -------
    int
        Radius in whole meters.
    """
    if pixel_width <= 0 or pixel_height <= 0:
        return 0
    resolution = meters_per_pixel(latitude, zoom)
    width_m = resolution * pixel_width
    height_m = resolution * pixel_height
    return max(0, math.floor(QUERY_RADIUS_FACTOR * min(width_m, height_m)))


def line_center(points: Sequence[Position]) -> tuple[float, float]:
    """Midpoint of the first and last point of a line.

    Raises
    ------
    InvalidGeometryError
        If the line has fewer than two points.
    """
    if len(points) < 2:
        raise InvalidGeometryError(f"line must have at least two points, got {len(points)}")
    start_lon, start_lat = points[0]
    end_lon, end_lat = points[-1]
    return ((start_lon + end_lon) / 2, (start_lat + end_lat) / 2)


def multi_line_center(segments: Sequence[Sequence[Position]]) -> tuple[float, float]:
    """Unweighted mean of the endpoint midpoints of every usable segment.

    Segments with fewer than two points are skipped.

    Raises
    ------
    InvalidGeometryError
        If no segment has at least two points.
    """
    total_lon = 0.0
    total_lat = 0.0
    count = 0
    for segment in segments:
        if len(segment) < 2:
            continue
        lon, lat = line_center(segment)
        total_lon += lon
        total_lat += lat
        count += 1
    if count == 0:
        raise InvalidGeometryError("multi-line has no segment with at least two points")
    return (total_lon / count, total_lat / count)


def centroid(geometry: Line | MultiLine) -> tuple[float, float]:
    """Representative ``(longitude, latitude)`` point of a road geometry."""
    if isinstance(geometry, Line):
        return line_center(geometry.coordinates)
    if isinstance(geometry, MultiLine):
        return multi_line_center(geometry.coordinates)
    raise InvalidGeometryError(f"unsupported geometry type: {type(geometry).__name__}")
