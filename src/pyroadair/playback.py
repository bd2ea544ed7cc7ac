"""Time playback controller.

A two-state machine (paused/playing) that advances the time cursor by one
hour on a fixed cadence while playing.  The cadence timer is an owned
asyncio task, created on ``play()`` and cancelled exactly once on
``stop()`` or ``close()``.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, date, datetime, timedelta

from pyroadair._constants import DEFAULT_TIME, MAX_DATE, MIN_DATE, PLAYBACK_INTERVAL_SECONDS
from pyroadair.models.status import PlaybackState

_logger = logging.getLogger(__name__)

STEP = timedelta(hours=1)


def _floor_hour(value: datetime) -> datetime:
    # The cursor is kept in UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).replace(minute=0, second=0, microsecond=0)


class PlaybackController:
    """Advance a time cursor while in play mode.

    Parameters
    ----------
    initial_time : datetime
        Starting cursor, converted to UTC and floored to the hour (naive
        values are taken as UTC).
    interval : float
        Seconds between ticks while playing.
    min_date, max_date : date
        Range accepted by manual edits.
    on_change : callable, optional
        Called with the new :class:`PlaybackState` after every accepted
        change.  Exceptions raised by it are logged and swallowed.
    sleep : callable, optional
        Awaitable sleep used by the timer (tests inject a fake).
    """

    def __init__(
        self,
        *,
        initial_time: datetime = DEFAULT_TIME,
        interval: float = PLAYBACK_INTERVAL_SECONDS,
        min_date: date = MIN_DATE,
        max_date: date = MAX_DATE,
        on_change: Callable[[PlaybackState], None] | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._state = PlaybackState(current_time=_floor_hour(initial_time))
        self._interval = interval
        self._min_date = min_date
        self._max_date = max_date
        self._on_change = on_change
        self._sleep = sleep
        self._timer: asyncio.Task[None] | None = None
        self._cancelled: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_time(self) -> datetime:
        return self._state.current_time

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    def _update(self, **changes: object) -> None:
        self._state = self._state.model_copy(update=changes)
        if self._on_change is not None:
            try:
                self._on_change(self._state)
            except Exception:
                _logger.debug("on_change callback failed", exc_info=True)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def play(self) -> bool:
        """Enter play mode and start the cadence timer.

        Must be called from a running event loop.  Returns ``False`` when
        already playing (no second timer is created).
        """
        if self._state.is_playing:
            return False
        self._timer = asyncio.get_running_loop().create_task(self._run())
        self._update(is_playing=True)
        _logger.debug("Playback started at %s", self._state.current_time)
        return True

    def stop(self) -> bool:
        """Leave play mode and cancel the timer.  ``False`` when already paused."""
        if not self._state.is_playing:
            return False
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            self._cancelled.add(timer)
            timer.add_done_callback(self._cancelled.discard)
        self._update(is_playing=False)
        _logger.debug("Playback stopped at %s", self._state.current_time)
        return True

    def tick(self) -> bool:
        """Advance the cursor by one hour.  Ignored (``False``) while paused."""
        if not self._state.is_playing:
            return False
        self._update(current_time=self._state.current_time + STEP)
        return True

    async def close(self) -> None:
        """Stop playback and wait for every cancelled timer task to finish."""
        self.stop()
        for timer in list(self._cancelled):
            with contextlib.suppress(asyncio.CancelledError):
                await timer
        self._cancelled.clear()

    async def _run(self) -> None:
        while True:
            await self._sleep(self._interval)
            self.tick()

    # ------------------------------------------------------------------
    # Manual edits (rejected while playing)
    # ------------------------------------------------------------------

    def _check_date(self, value: date) -> None:
        if not self._min_date <= value <= self._max_date:
            raise ValueError(f"date must be between {self._min_date} and {self._max_date}, got {value}")

    def _edit(self, new_time: datetime) -> bool:
        if self._state.is_playing:
            _logger.debug("Ignoring time edit to %s while playing", new_time)
            return False
        new_time = _floor_hour(new_time)
        self._check_date(new_time.date())
        if new_time != self._state.current_time:
            self._update(current_time=new_time)
        return True

    def set_time(self, value: datetime) -> bool:
        """Replace the cursor.  Returns ``False`` if ignored while playing.

        Raises
        ------
        ValueError
            If the date is outside the accepted range.
        """
        return self._edit(value)

    def set_date(self, value: date) -> bool:
        """Replace the calendar date, keeping the current hour."""
        current = self._state.current_time
        return self._edit(current.replace(year=value.year, month=value.month, day=value.day))

    def set_hour(self, hour: int) -> bool:
        """Replace the hour of day, keeping the current date."""
        if not 0 <= hour <= 23:
            raise ValueError(f"hour must be between 0 and 23, got {hour}")
        return self._edit(self._state.current_time.replace(hour=hour))
