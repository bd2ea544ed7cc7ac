"""Data load coordination.

Each call to :meth:`DataLoadCoordinator.load` is stamped with a request
epoch.  Results are only applied when their epoch is still the latest one
issued; older results are dropped rather than cancelled, so a slow fetch
can never overwrite fresher data.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pyroadair._api.air_quality import fetch_samples
from pyroadair._api.roads import fetch_roads
from pyroadair._transport import Transport
from pyroadair.config import RoadAirConfig
from pyroadair.exceptions import RoadAirDataError, RoadAirError, RoadAirTransportError
from pyroadair.join import rebuild_value_map
from pyroadair.models.road import Road
from pyroadair.models.sample import Sample
from pyroadair.models.status import LoadState
from pyroadair.state.store import MapSnapshot, MapStateStore

_logger = logging.getLogger(__name__)


class LoadStatus(StrEnum):
    APPLIED = "applied"
    SUPERSEDED = "superseded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one load cycle."""

    status: LoadStatus
    epoch: int
    snapshot: MapSnapshot | None = None
    error: RoadAirError | None = None


class DataLoadCoordinator:
    """Fetch samples and roads for a query area and publish them atomically.

    Parameters
    ----------
    config : RoadAirConfig
        Client configuration.
    transport : Transport
        Backend transport.
    store : MapStateStore
        Store that receives applied snapshots.
    on_load_state : callable, optional
        Called with the new :class:`LoadState` whenever it changes.
    """

    def __init__(
        self,
        config: RoadAirConfig,
        transport: Transport,
        store: MapStateStore,
        *,
        on_load_state: Callable[[LoadState], None] | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._store = store
        self._on_load_state = on_load_state
        self._state = LoadState()

    @property
    def load_state(self) -> LoadState:
        return self._state

    def _set_state(self, *, is_loading: bool, request_epoch: int | None = None) -> None:
        epoch = self._state.request_epoch if request_epoch is None else request_epoch
        new_state = LoadState(is_loading=is_loading, request_epoch=epoch)
        if new_state == self._state:
            return
        self._state = new_state
        if self._on_load_state is not None:
            try:
                self._on_load_state(new_state)
            except Exception:
                _logger.debug("on_load_state callback failed", exc_info=True)

    def _is_current(self, epoch: int) -> bool:
        return epoch == self._state.request_epoch

    def _finish(self, epoch: int) -> None:
        # A newer load owns the busy flag until it finishes itself.
        if self._is_current(epoch):
            self._set_state(is_loading=False)

    async def _fetch(
        self,
        latitude: float,
        longitude: float,
        radius: int,
        time: datetime,
    ) -> tuple[tuple[Sample, ...], tuple[Road, ...]]:
        samples, roads = await asyncio.gather(
            fetch_samples(self._config, self._transport, latitude, longitude, radius, time),
            fetch_roads(self._transport, latitude, longitude, radius),
            return_exceptions=True,
        )
        for outcome in (samples, roads):
            if isinstance(outcome, BaseException):
                raise outcome
        assert isinstance(samples, tuple) and isinstance(roads, tuple)  # noqa: S101
        return samples, roads

    async def load(self, latitude: float, longitude: float, radius: int, time: datetime) -> LoadResult:
        """Fetch both datasets concurrently and apply them if still current.

        Parameters
        ----------
        latitude, longitude : float
            Query centre in degrees.
        radius : int
            Query radius in meters.
        time : datetime
            Sample time.

        Returns
        -------
        LoadResult
            ``APPLIED`` with the new snapshot, ``SUPERSEDED`` when a newer
            load was issued meanwhile, or ``FAILED`` with the error when a
            fetch failed or returned an empty/malformed body.  On failure
            the previously applied snapshot stays in place.
        """
        epoch = self._state.request_epoch + 1
        self._set_state(is_loading=True, request_epoch=epoch)
        _logger.debug("Load %d: lat=%s lon=%s radius=%d time=%s", epoch, latitude, longitude, radius, time)

        try:
            samples, roads = await self._fetch(latitude, longitude, radius, time)
        except (RoadAirTransportError, RoadAirDataError) as exc:
            if not self._is_current(epoch):
                _logger.debug("Load %d failed after being superseded: %s", epoch, exc)
                return LoadResult(LoadStatus.SUPERSEDED, epoch)
            _logger.warning("Load %d failed: %s", epoch, exc)
            self._finish(epoch)
            return LoadResult(LoadStatus.FAILED, epoch, error=exc)
        except BaseException:
            self._finish(epoch)
            raise

        if not self._is_current(epoch):
            _logger.debug("Discarding load %d, superseded by %d", epoch, self._state.request_epoch)
            return LoadResult(LoadStatus.SUPERSEDED, epoch)

        snapshot = MapSnapshot(
            samples=samples,
            roads=roads,
            value_map=rebuild_value_map(roads, samples),
            time=time,
            latitude=latitude,
            longitude=longitude,
            radius=radius,
            epoch=epoch,
        )
        self._store.replace(snapshot)
        self._finish(epoch)
        return LoadResult(LoadStatus.APPLIED, epoch, snapshot=snapshot)
