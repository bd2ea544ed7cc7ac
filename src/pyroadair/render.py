"""Render payloads for the map collaborator.

Turns a :class:`~pyroadair.state.MapSnapshot` into plain data a map
renderer can draw: styled road features and heatmap points.  Nothing here
draws anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pyroadair.models.road import Line, MultiLine, RoadProperties
from pyroadair.models.status import LoadState, PlaybackState
from pyroadair.scales import RGB
from pyroadair.state.store import MapSnapshot

#: Duration of colour/width transitions between two snapshots.
TRANSITION_MS = 1000

ROAD_LAYER_SETTINGS: dict[str, float] = {
    "line_width_min_pixels": 0.5,
    "picking_radius": 5,
    "transition_ms": TRANSITION_MS,
}

HEATMAP_SETTINGS: dict[str, float] = {
    "intensity": 0.5,
    "threshold": 0.03,
    "radius_pixels": 50,
    "opacity": 0.15,
}


@dataclass(frozen=True)
class StyledRoad:
    id: str
    geometry: Line | MultiLine
    properties: RoadProperties
    color: RGB
    width: float


def style_roads(snapshot: MapSnapshot) -> list[StyledRoad]:
    """Attach colour and width to every road of *snapshot*.

    Roads missing from the value map get the fallback styling.
    """
    value_map = snapshot.value_map
    return [
        StyledRoad(
            id=road.id,
            geometry=road.geometry,
            properties=road.properties,
            color=value_map.color_for(road.id),
            width=value_map.width_for(road.id),
        )
        for road in snapshot.roads
    ]


def to_feature_collection(snapshot: MapSnapshot) -> dict[str, Any]:
    """GeoJSON ``FeatureCollection`` with ``color``/``width``/``value`` properties."""
    features: list[dict[str, Any]] = []
    for styled in style_roads(snapshot):
        properties = styled.properties.model_dump(mode="json", exclude_none=True)
        properties["color"] = list(styled.color)
        properties["width"] = styled.width
        properties["value"] = snapshot.value_map.get(styled.id)
        features.append(
            {
                "type": "Feature",
                "id": styled.id,
                "geometry": styled.geometry.model_dump(mode="json"),
                "properties": properties,
            }
        )
    return {"type": "FeatureCollection", "features": features}


def heatmap_points(snapshot: MapSnapshot) -> list[dict[str, Any]]:
    """Raw samples as ``{"position": [lon, lat], "weight": value}`` points."""
    return [{"position": list(s.position), "weight": s.value} for s in snapshot.samples]


def road_layer(snapshot: MapSnapshot) -> dict[str, Any]:
    """Road layer payload: styled features plus the line layer settings."""
    return {"data": to_feature_collection(snapshot), **ROAD_LAYER_SETTINGS}


def heatmap_layer(snapshot: MapSnapshot) -> dict[str, Any]:
    """Heatmap layer payload: sample points plus the density settings."""
    return {"data": heatmap_points(snapshot), **HEATMAP_SETTINGS}


def interaction_enabled(playback: PlaybackState) -> bool:
    """Pan/zoom is disabled while playing."""
    return not playback.is_playing


def show_busy_overlay(load: LoadState, playback: PlaybackState) -> bool:
    """The busy overlay is shown for user-driven loads only, not during playback."""
    return load.is_loading and not playback.is_playing
