"""Data models for backend responses and controller state."""

from pyroadair.models.road import Line, MultiLine, Position, Road, RoadGeometry, RoadProperties
from pyroadair.models.sample import Sample
from pyroadair.models.status import LoadState, PlaybackState
from pyroadair.models.viewport import ViewportState

__all__ = [
    "Line",
    "LoadState",
    "MultiLine",
    "PlaybackState",
    "Position",
    "Road",
    "RoadGeometry",
    "RoadProperties",
    "Sample",
    "ViewportState",
]
