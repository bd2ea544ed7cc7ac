"""High-level async client tying viewport, playback and loading together."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import date, datetime
from typing import Any

import aiohttp

from pyroadair._transport import HttpTransport, Transport
from pyroadair.config import RoadAirConfig
from pyroadair.coordinator import DataLoadCoordinator, LoadResult
from pyroadair.exceptions import RoadAirError
from pyroadair.models.status import LoadState, PlaybackState
from pyroadair.models.viewport import ViewportState
from pyroadair.playback import PlaybackController
from pyroadair.state.store import MapSnapshot, MapStateStore, SnapshotListener

_logger = logging.getLogger(__name__)


class AirMapClient:
    """Async client for the road air-quality map.

    Viewport changes and time changes (manual or from playback) both
    trigger a background load through the same coordinator; the newest
    load always wins.

    Usage::

        async with AirMapClient(config) as client:
            client.subscribe(render)
            client.set_viewport(pixel_width=1280, pixel_height=720)
            client.play()
    """

    def __init__(
        self,
        config: RoadAirConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        on_load_state: Callable[[LoadState], None] | None = None,
        on_playback: Callable[[PlaybackState], None] | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport
        self._transport: Transport | None = None
        self._coordinator: DataLoadCoordinator | None = None
        self._store = MapStateStore()
        self._on_load_state = on_load_state
        self._on_playback = on_playback
        self._viewport = ViewportState(
            latitude=config.initial_latitude,
            longitude=config.initial_longitude,
            zoom=self._clamp_zoom(config.initial_zoom),
        )
        self._playback = PlaybackController(
            initial_time=config.default_time,
            interval=config.playback_interval,
            min_date=config.min_date,
            max_date=config.max_date,
            on_change=self._on_playback_change,
            sleep=sleep,
        )
        self._last_time = self._playback.current_time
        self._pending: set[asyncio.Task[LoadResult | None]] = set()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AirMapClient:
        if self._external_transport is not None:
            self._transport = self._external_transport
        else:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        self._coordinator = DataLoadCoordinator(
            self._config,
            self._transport,
            self._store,
            on_load_state=self._on_load_state,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self._playback.close()
        for task in list(self._pending):
            task.cancel()
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        self._pending.clear()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._coordinator = None
        self._transport = None

    def _require_coordinator(self) -> DataLoadCoordinator:
        if self._coordinator is None:
            raise RoadAirError("Client not initialized. Use 'async with AirMapClient(...) as client:'")
        return self._coordinator

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def viewport(self) -> ViewportState:
        return self._viewport

    @property
    def playback(self) -> PlaybackState:
        return self._playback.state

    @property
    def load_state(self) -> LoadState:
        if self._coordinator is None:
            return LoadState()
        return self._coordinator.load_state

    @property
    def snapshot(self) -> MapSnapshot | None:
        return self._store.snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call *listener* with every newly applied snapshot."""
        return self._store.subscribe(listener)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def refresh(self) -> LoadResult | None:
        """Load data for the current viewport and time.

        Returns ``None`` without fetching when the viewport has no size yet
        (query radius ``0``).
        """
        coordinator = self._require_coordinator()
        viewport = self._viewport
        radius = viewport.query_radius_meters
        if radius <= 0:
            _logger.debug("Skipping load: viewport has no size yet")
            return None
        return await coordinator.load(viewport.latitude, viewport.longitude, radius, self._playback.current_time)

    def _schedule_refresh(self) -> None:
        if self._coordinator is None:
            return
        task = asyncio.get_running_loop().create_task(self.refresh())
        self._pending.add(task)
        task.add_done_callback(self._on_refresh_done)

    def _on_refresh_done(self, task: asyncio.Task[LoadResult | None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Background load crashed", exc_info=exc)

    async def wait_idle(self) -> None:
        """Wait until every scheduled load has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ------------------------------------------------------------------
    # Viewport commands (from the map collaborator)
    # ------------------------------------------------------------------

    def _clamp_zoom(self, zoom: float) -> float:
        return min(self._config.max_zoom, max(self._config.min_zoom, zoom))

    def set_viewport(
        self,
        *,
        latitude: float | None = None,
        longitude: float | None = None,
        zoom: float | None = None,
        pixel_width: int | None = None,
        pixel_height: int | None = None,
    ) -> ViewportState:
        """Update the viewport and schedule a load for it.

        Omitted fields keep their current value.  Zoom is clamped to the
        configured bounds.
        """
        update: dict[str, Any] = {
            "latitude": latitude,
            "longitude": longitude,
            "zoom": None if zoom is None else self._clamp_zoom(zoom),
            "pixel_width": pixel_width,
            "pixel_height": pixel_height,
        }
        merged = self._viewport.model_dump()
        merged.update({key: value for key, value in update.items() if value is not None})
        return self._apply_viewport(ViewportState.model_validate(merged))

    def pan_to(self, latitude: float, longitude: float) -> ViewportState:
        """Move the viewport centre (end of a drag gesture)."""
        return self._apply_viewport(self._viewport.with_center(latitude, longitude))

    def resize(self, pixel_width: int, pixel_height: int) -> ViewportState:
        """Record the viewport size reported by the renderer."""
        return self._apply_viewport(self._viewport.with_size(pixel_width, pixel_height))

    def _apply_viewport(self, viewport: ViewportState) -> ViewportState:
        self._viewport = viewport
        self._schedule_refresh()
        return viewport

    # ------------------------------------------------------------------
    # Playback commands (from the time UI)
    # ------------------------------------------------------------------

    def _on_playback_change(self, state: PlaybackState) -> None:
        if self._on_playback is not None:
            try:
                self._on_playback(state)
            except Exception:
                _logger.debug("on_playback callback failed", exc_info=True)
        if state.current_time != self._last_time:
            self._last_time = state.current_time
            self._schedule_refresh()

    def play(self) -> bool:
        return self._playback.play()

    def stop(self) -> bool:
        return self._playback.stop()

    def set_time(self, value: datetime) -> bool:
        return self._playback.set_time(value)

    def set_date(self, value: date) -> bool:
        return self._playback.set_date(value)

    def set_hour(self, hour: int) -> bool:
        return self._playback.set_hour(hour)
