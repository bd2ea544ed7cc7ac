"""Road geometry models.

Roads arrive as GeoJSON features whose geometry is either a
``LineString`` or a ``MultiLineString``.  The two are modelled as a closed
variant discriminated on ``type``; any other geometry kind is rejected
at validation time.

Point counts are *not* validated here: a line with fewer than two points
is a valid model and is rejected later by the centroid extractor, so that
one bad road never aborts a whole load.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from pyroadair._normalize import safe_float, safe_str


def _truncate_position(value: Any) -> Any:
    """Drop altitude (and any further ordinates) from a GeoJSON position."""
    if isinstance(value, (list, tuple)) and len(value) > 2:
        return tuple(value[:2])
    return value


Position = Annotated[tuple[float, float], BeforeValidator(_truncate_position)]
"""``(longitude, latitude)`` pair."""


class Line(BaseModel):
    """GeoJSON ``LineString``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["LineString"] = "LineString"
    coordinates: tuple[Position, ...]


class MultiLine(BaseModel):
    """GeoJSON ``MultiLineString``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: tuple[tuple[Position, ...], ...]


RoadGeometry = Annotated[Line | MultiLine, Field(discriminator="type")]


class RoadProperties(BaseModel):
    """Descriptive road attributes.  Not used by the join."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: str | None = None
    name: str | None = None
    classification: str | None = Field(default=None, validation_alias=AliasChoices("classification", "type"))
    state: str | None = None
    length: float | None = None

    @field_validator("id", "name", "classification", "state", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("length", mode="before")
    @classmethod
    def _coerce_length(cls, value: Any) -> float | None:
        return safe_float(value)


class Road(BaseModel):
    """A road feature: identifier, geometry and attributes."""

    SUPPORTED_GEOMETRY_TYPES: ClassVar[frozenset[str]] = frozenset({"LineString", "MultiLineString"})

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    geometry: RoadGeometry
    properties: RoadProperties = Field(default_factory=RoadProperties)

    @model_validator(mode="before")
    @classmethod
    def _resolve_id(cls, values: Any) -> Any:
        """Use the feature id, falling back to ``properties.id``."""
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        properties = merged.get("properties")
        if properties is None:
            properties = {}
            merged["properties"] = properties
        road_id = safe_str(merged.get("id"))
        if road_id is None and isinstance(properties, dict):
            road_id = safe_str(properties.get("id"))
        if road_id is None:
            merged.pop("id", None)
        else:
            merged["id"] = road_id
        return merged
