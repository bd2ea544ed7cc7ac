"""Pollutant sample endpoint.

Endpoint:
  - /airquality (samples around a point at one time)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from pyroadair._api._common import build_area_params, format_timestamp
from pyroadair._constants import AIR_QUALITY_ENDPOINT
from pyroadair._transport import Transport
from pyroadair.config import RoadAirConfig
from pyroadair.exceptions import RoadAirDataError
from pyroadair.models.sample import Sample

_logger = logging.getLogger(__name__)


def parse_samples(body: Any, *, axis_order: str = "lat_lon") -> tuple[Sample, ...]:
    """Parse a list of sample triples.

    An empty list is valid ("no data available").  A ``null`` body, a
    non-list body or any malformed triple rejects the whole response.
    """
    if body is None:
        raise RoadAirDataError("Empty sample response", endpoint=AIR_QUALITY_ENDPOINT)
    if not isinstance(body, list):
        raise RoadAirDataError(
            f"Sample response must be a list, got {type(body).__name__}",
            endpoint=AIR_QUALITY_ENDPOINT,
        )
    try:
        return tuple(Sample.from_triple(item, axis_order=axis_order) for item in body)
    except (ValidationError, ValueError) as exc:
        raise RoadAirDataError(f"Malformed sample: {exc}", endpoint=AIR_QUALITY_ENDPOINT) from exc


async def fetch_samples(
    config: RoadAirConfig,
    transport: Transport,
    latitude: float,
    longitude: float,
    radius: int,
    time: datetime,
) -> tuple[Sample, ...]:
    """Fetch the pollutant samples around a point at *time*.

    Raises
    ------
    RoadAirTransportError
        If the request fails.
    RoadAirDataError
        If the body is empty or malformed.
    """
    params = build_area_params(latitude, longitude, radius)
    params["date"] = format_timestamp(time)
    body = await transport.get_json(AIR_QUALITY_ENDPOINT, params)
    samples = parse_samples(body, axis_order=config.sample_axis_order)
    _logger.debug("Fetched %d samples for %s", len(samples), params["date"])
    return samples
