"""Road-to-sample join.

Every load produces a fresh :class:`ValueMap`; entries are never updated
in place, so a renderer holding a map always sees one complete join.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

from pyroadair._constants import FALLBACK_COLOR, FALLBACK_WIDTH
from pyroadair.exceptions import InvalidGeometryError
from pyroadair.geometry import centroid
from pyroadair.matching import nearest
from pyroadair.models.road import Road
from pyroadair.models.sample import Sample
from pyroadair.scales import RGB, color_of, width_of

_logger = logging.getLogger(__name__)


class ValueMap(Mapping[str, float]):
    """Read-only mapping of road id to matched measurement value."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, float] | None = None) -> None:
        self._values: Mapping[str, float] = MappingProxyType(dict(values or {}))

    def __getitem__(self, road_id: str) -> float:
        return self._values[road_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ValueMap({dict(self._values)!r})"

    def color_for(self, road_id: str) -> RGB:
        """Line colour for a road; grey when the road was not matched."""
        value = self._values.get(road_id)
        if value is None:
            return FALLBACK_COLOR
        return color_of(value)

    def width_for(self, road_id: str) -> float:
        """Line width for a road; the thin fallback width when not matched."""
        value = self._values.get(road_id)
        if value is None:
            return FALLBACK_WIDTH
        return width_of(value)


EMPTY_VALUE_MAP = ValueMap()


def rebuild_value_map(roads: Iterable[Road], samples: Sequence[Sample]) -> ValueMap:
    """Match every road's representative point to its nearest sample.

    Roads whose geometry has too few points are left out of the result
    (and are rendered with fallback styling).

    Parameters
    ----------
    roads : iterable of Road
        Road features of the current load.
    samples : sequence of Sample
        Samples of the same load.

    Returns
    -------
    ValueMap
        New map covering every road with a usable geometry.
    """
    values: dict[str, float] = {}
    skipped = 0
    for road in roads:
        try:
            point = centroid(road.geometry)
        except InvalidGeometryError:
            _logger.debug("Skipping road %s: geometry has too few points", road.id)
            skipped += 1
            continue
        values[road.id] = nearest(point, samples)

    _logger.debug("Joined %d roads against %d samples (%d skipped)", len(values), len(samples), skipped)
    return ValueMap(values)
