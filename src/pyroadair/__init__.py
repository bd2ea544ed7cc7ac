"""pyroadair - Async viewport-scoped join of road networks and pollutant samples."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyroadair")
except PackageNotFoundError:
    __version__ = "0+local"
from pyroadair.client import AirMapClient
from pyroadair.config import RoadAirConfig
from pyroadair.coordinator import DataLoadCoordinator, LoadResult, LoadStatus
from pyroadair.exceptions import (
    InvalidGeometryError,
    RoadAirConfigError,
    RoadAirDataError,
    RoadAirError,
    RoadAirTransportError,
)
from pyroadair.geometry import centroid, compute_query_radius
from pyroadair.join import ValueMap, rebuild_value_map
from pyroadair.matching import nearest
from pyroadair.models import (
    Line,
    LoadState,
    MultiLine,
    PlaybackState,
    Road,
    RoadProperties,
    Sample,
    ViewportState,
)
from pyroadair.playback import PlaybackController
from pyroadair.scales import color_of, width_of
from pyroadair.state import MapSnapshot, MapStateStore

__all__ = [
    "__version__",
    "AirMapClient",
    "DataLoadCoordinator",
    "InvalidGeometryError",
    "Line",
    "LoadResult",
    "LoadState",
    "LoadStatus",
    "MapSnapshot",
    "MapStateStore",
    "MultiLine",
    "PlaybackController",
    "PlaybackState",
    "Road",
    "RoadAirConfig",
    "RoadAirConfigError",
    "RoadAirDataError",
    "RoadAirError",
    "RoadAirTransportError",
    "RoadProperties",
    "Sample",
    "ValueMap",
    "ViewportState",
    "centroid",
    "color_of",
    "compute_query_radius",
    "nearest",
    "rebuild_value_map",
    "width_of",
]
