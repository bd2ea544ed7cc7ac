"""Internal constants shared across the library."""

from __future__ import annotations

from datetime import UTC, date, datetime

BASE_URL = "http://localhost:8000"
AIR_QUALITY_ENDPOINT = "/airquality"
ROADS_ENDPOINT = "/roads"

# ------------------------------------------------------------------
# Web Mercator projection
# ------------------------------------------------------------------

EARTH_CIRCUMFERENCE_METERS = 40075016.686
TILE_SIZE_PX = 256
QUERY_RADIUS_FACTOR = 0.3

# ------------------------------------------------------------------
# Initial map configuration
# ------------------------------------------------------------------

INITIAL_LATITUDE = 41.38922055290922
INITIAL_LONGITUDE = 2.113531600484349
INITIAL_ZOOM = 15.0
MIN_ZOOM = 14.0
MAX_ZOOM = 22.0

# ------------------------------------------------------------------
# Playback
# ------------------------------------------------------------------

DEFAULT_TIME = datetime(2023, 1, 1, 2, 0, tzinfo=UTC)
MIN_DATE = date(2023, 1, 1)
MAX_DATE = date(2023, 12, 31)
PLAYBACK_INTERVAL_SECONDS = 3.0

# ------------------------------------------------------------------
# Styling  (green -> dark red)
# ------------------------------------------------------------------

COLOR_DOMAIN: tuple[float, ...] = (0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9)
COLOR_RAMP: tuple[tuple[int, int, int], ...] = (
    (26, 152, 80),
    (102, 189, 99),
    (166, 217, 106),
    (217, 239, 139),
    (255, 255, 191),
    (254, 224, 139),
    (253, 174, 97),
    (244, 109, 67),
    (215, 48, 39),
    (168, 0, 0),
)
WIDTH_DOMAIN: tuple[float, float] = (0.0, 0.5)
WIDTH_RANGE: tuple[float, float] = (10.0, 20.0)

FALLBACK_COLOR: tuple[int, int, int] = (200, 200, 200)
FALLBACK_WIDTH = 0.5
