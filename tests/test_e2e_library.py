from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Any

import pytest

from pyroadair._constants import COLOR_RAMP
from pyroadair.client import AirMapClient
from pyroadair.config import RoadAirConfig
from pyroadair.coordinator import LoadStatus
from pyroadair.exceptions import RoadAirError
from pyroadair.state.store import MapSnapshot
from tests.conftest import FakeTimer

T0 = datetime(2023, 1, 1, 2, tzinfo=UTC)


@dataclass
class FakeAirBackend:
    samples: Any = field(default_factory=lambda: [[41.39, 2.11, 0.05]])
    roads: Any = field(
        default_factory=lambda: {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "id": "r1",
                    "geometry": {"type": "LineString", "coordinates": [[2.10, 41.38], [2.12, 41.40]]},
                    "properties": {"name": "B-23", "type": "motorway"},
                }
            ],
        }
    )
    calls: list[tuple[str, dict[str, str]]] = field(default_factory=list)

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        self.calls.append((endpoint, dict(params)))
        if endpoint == "/airquality":
            return self.samples
        if endpoint == "/roads":
            return self.roads
        raise AssertionError(f"unexpected endpoint {endpoint}")

    def dates(self) -> list[str]:
        return [params["date"] for endpoint, params in self.calls if endpoint == "/airquality"]


def _client(backend: FakeAirBackend, timer: FakeTimer, **kwargs: Any) -> AirMapClient:
    return AirMapClient(RoadAirConfig(), transport=backend, sleep=timer.sleep, **kwargs)


@pytest.mark.asyncio
async def test_single_road_scenario(timer: FakeTimer) -> None:
    backend = FakeAirBackend()
    snapshots: list[MapSnapshot] = []

    async with _client(backend, timer) as client:
        client.subscribe(snapshots.append)
        client.set_viewport(pixel_width=1280, pixel_height=720)
        await client.wait_idle()

        snapshot = client.snapshot
        assert snapshot is not None
        assert snapshots == [snapshot]
        assert dict(snapshot.value_map) == {"r1": 0.05}
        assert snapshot.value_map.color_for("r1") == COLOR_RAMP[0]
        assert snapshot.value_map.width_for("r1") == pytest.approx(11.0)
        assert client.load_state.is_loading is False

    _, params = backend.calls[0]
    assert params["lat"] == repr(client.viewport.latitude)
    assert int(params["distancia"]) == client.viewport.query_radius_meters
    assert backend.dates() == ["2023-01-01T02:00:00.000Z"]


@pytest.mark.asyncio
async def test_empty_samples_scenario(timer: FakeTimer) -> None:
    backend = FakeAirBackend(samples=[])

    async with _client(backend, timer) as client:
        client.set_viewport(pixel_width=800, pixel_height=600)
        await client.wait_idle()

        snapshot = client.snapshot
        assert snapshot is not None
        assert dict(snapshot.value_map) == {"r1": 0.0}
        assert snapshot.value_map.color_for("r1") == COLOR_RAMP[0]
        assert snapshot.value_map.width_for("r1") == 10.0


@pytest.mark.asyncio
async def test_playback_scenario_drives_loads(timer: FakeTimer) -> None:
    backend = FakeAirBackend()

    async with _client(backend, timer) as client:
        client.set_viewport(pixel_width=800, pixel_height=600)
        await client.wait_idle()

        assert client.play() is True
        await timer.fire(3)
        await client.wait_idle()

        assert client.playback.current_time == T0 + timedelta(hours=3)
        assert client.playback.is_playing is True
        assert client.snapshot is not None
        assert client.snapshot.time == T0 + timedelta(hours=3)

        assert client.stop() is True
        await timer.fire(2)
        await client.wait_idle()
        assert client.playback.current_time == T0 + timedelta(hours=3)

    assert backend.dates() == [
        "2023-01-01T02:00:00.000Z",
        "2023-01-01T03:00:00.000Z",
        "2023-01-01T04:00:00.000Z",
        "2023-01-01T05:00:00.000Z",
    ]


@pytest.mark.asyncio
async def test_no_query_until_viewport_has_a_size(timer: FakeTimer) -> None:
    backend = FakeAirBackend()

    async with _client(backend, timer) as client:
        assert await client.refresh() is None
        client.pan_to(41.40, 2.12)
        await client.wait_idle()

    assert backend.calls == []


@pytest.mark.asyncio
async def test_resize_and_pan_each_load_the_new_viewport(timer: FakeTimer) -> None:
    backend = FakeAirBackend()

    async with _client(backend, timer) as client:
        sized = client.resize(1280, 720)
        await client.wait_idle()
        moved = client.pan_to(41.40, 2.12)
        await client.wait_idle()

        assert (moved.pixel_width, moved.pixel_height, moved.zoom) == (1280, 720, sized.zoom)
        assert client.snapshot is not None
        assert (client.snapshot.latitude, client.snapshot.longitude) == (41.40, 2.12)

    lats = [params["lat"] for endpoint, params in backend.calls if endpoint == "/airquality"]
    assert lats == [repr(sized.latitude), "41.4"]


@pytest.mark.asyncio
async def test_manual_time_edits_trigger_loads_only_while_paused(timer: FakeTimer) -> None:
    backend = FakeAirBackend()

    async with _client(backend, timer) as client:
        client.set_viewport(pixel_width=800, pixel_height=600)
        await client.wait_idle()

        assert client.set_date(date(2023, 6, 15)) is True
        await client.wait_idle()
        assert client.set_hour(8) is True
        await client.wait_idle()

        client.play()
        assert client.set_hour(20) is False
        client.stop()
        await client.wait_idle()

    assert backend.dates() == [
        "2023-01-01T02:00:00.000Z",
        "2023-06-15T02:00:00.000Z",
        "2023-06-15T08:00:00.000Z",
    ]


@pytest.mark.asyncio
async def test_failed_load_keeps_previous_snapshot(timer: FakeTimer) -> None:
    backend = FakeAirBackend()

    async with _client(backend, timer) as client:
        client.set_viewport(pixel_width=800, pixel_height=600)
        await client.wait_idle()
        previous = client.snapshot

        backend.samples = None
        result = await client.refresh()

        assert result is not None
        assert result.status == LoadStatus.FAILED
        assert client.snapshot is previous
        assert client.load_state.is_loading is False


@pytest.mark.asyncio
async def test_zoom_is_clamped(timer: FakeTimer) -> None:
    backend = FakeAirBackend()

    async with _client(backend, timer) as client:
        assert client.set_viewport(zoom=30).zoom == 22
        assert client.set_viewport(zoom=3).zoom == 14
        await client.wait_idle()


@pytest.mark.asyncio
async def test_load_state_callback_sees_busy_flag(timer: FakeTimer) -> None:
    backend = FakeAirBackend()
    busy: list[bool] = []

    async with _client(backend, timer, on_load_state=lambda state: busy.append(state.is_loading)) as client:
        client.set_viewport(pixel_width=800, pixel_height=600)
        await client.wait_idle()

    assert busy == [True, False]


@pytest.mark.asyncio
async def test_refresh_requires_context_manager(timer: FakeTimer) -> None:
    client = _client(FakeAirBackend(), timer)
    with pytest.raises(RoadAirError):
        await client.refresh()
