"""In-memory store for the current map snapshot.

This is the only component allowed to publish new map data.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from pyroadair.join import ValueMap
from pyroadair.models.road import Road
from pyroadair.models.sample import Sample

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapSnapshot:
    """One consistent ``(samples, roads)`` pair and the join built from it."""

    samples: tuple[Sample, ...]
    roads: tuple[Road, ...]
    value_map: ValueMap
    time: datetime
    latitude: float
    longitude: float
    radius: int
    epoch: int


SnapshotListener = Callable[[MapSnapshot], None]


class MapStateStore:
    """Holds the latest applied snapshot and notifies subscribers.

    Snapshots are swapped by reference; a listener never observes a
    partially updated snapshot.
    """

    def __init__(self) -> None:
        self._snapshot: MapSnapshot | None = None
        self._listeners: list[SnapshotListener] = []

    @property
    def snapshot(self) -> MapSnapshot | None:
        return self._snapshot

    def replace(self, snapshot: MapSnapshot) -> None:
        """Publish *snapshot* as the current map data."""
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                _logger.debug("Snapshot listener failed", exc_info=True)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
