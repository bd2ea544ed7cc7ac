"""Road geometry endpoint.

Endpoint:
  - /roads (GeoJSON FeatureCollection around a point)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyroadair._api._common import build_area_params
from pyroadair._constants import ROADS_ENDPOINT
from pyroadair._normalize import safe_str
from pyroadair._transport import Transport
from pyroadair.exceptions import RoadAirDataError
from pyroadair.models.road import Road

_logger = logging.getLogger(__name__)


def _geometry_type(feature: dict[str, Any]) -> Any:
    geometry = feature.get("geometry")
    return geometry.get("type") if isinstance(geometry, dict) else None


def parse_roads(body: Any) -> tuple[Road, ...]:
    """Parse a GeoJSON ``FeatureCollection`` into roads.

    Features with an unsupported geometry kind, or without any identifier,
    are dropped.  A ``null`` body, a body without a ``features`` list or a
    malformed supported feature rejects the whole response.
    """
    if body is None:
        raise RoadAirDataError("Empty road response", endpoint=ROADS_ENDPOINT)
    features = body.get("features") if isinstance(body, dict) else None
    if not isinstance(features, list):
        raise RoadAirDataError("Road response is not a FeatureCollection", endpoint=ROADS_ENDPOINT)

    roads: list[Road] = []
    for index, feature in enumerate(features):
        if not isinstance(feature, dict):
            raise RoadAirDataError(f"Feature {index} is not an object", endpoint=ROADS_ENDPOINT)
        geometry_type = _geometry_type(feature)
        if geometry_type not in Road.SUPPORTED_GEOMETRY_TYPES:
            _logger.debug("Dropping feature %d with geometry type %r", index, geometry_type)
            continue
        properties = feature.get("properties")
        fallback_id = properties.get("id") if isinstance(properties, dict) else None
        if safe_str(feature.get("id")) is None and safe_str(fallback_id) is None:
            _logger.debug("Dropping feature %d without an identifier", index)
            continue
        try:
            roads.append(Road.model_validate(feature))
        except ValidationError as exc:
            raise RoadAirDataError(f"Malformed feature {index}: {exc}", endpoint=ROADS_ENDPOINT) from exc
    return tuple(roads)


async def fetch_roads(
    transport: Transport,
    latitude: float,
    longitude: float,
    radius: int,
) -> tuple[Road, ...]:
    """Fetch the road features around a point.

    Raises
    ------
    RoadAirTransportError
        If the request fails.
    RoadAirDataError
        If the body is empty or malformed.
    """
    body = await transport.get_json(ROADS_ENDPOINT, build_area_params(latitude, longitude, radius))
    roads = parse_roads(body)
    _logger.debug("Fetched %d roads", len(roads))
    return roads
