from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator
from datetime import UTC, datetime

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer as AiohttpTestServer

from pyroadair._transport import HttpTransport
from pyroadair.config import RoadAirConfig
from pyroadair.coordinator import DataLoadCoordinator, LoadStatus
from pyroadair.exceptions import RoadAirTransportError
from pyroadair.state.store import MapStateStore

UNDECODABLE_BODY = b"\xff\xfe[]"


async def _air_quality(request: web.Request) -> web.Response:
    return web.json_response([[float(request.query["lat"]), float(request.query["lon"]), 0.2]])


async def _null(_: web.Request) -> web.Response:
    return web.Response(text="null", content_type="application/json")


async def _broken(_: web.Request) -> web.Response:
    return web.Response(status=500, text="database down")


async def _not_json(_: web.Request) -> web.Response:
    return web.Response(text="<html>oops</html>")


async def _not_utf8(_: web.Request) -> web.Response:
    return web.Response(body=UNDECODABLE_BODY, content_type="application/json")


@contextlib.asynccontextmanager
async def _serve(app: web.Application) -> AsyncIterator[HttpTransport]:
    server = AiohttpTestServer(app)
    await server.start_server()
    try:
        async with aiohttp.ClientSession() as session:
            config = RoadAirConfig(base_url=str(server.make_url("")).rstrip("/"))
            yield HttpTransport(config, session)
    finally:
        await server.close()


@pytest_asyncio.fixture
async def transport() -> AsyncIterator[HttpTransport]:
    app = web.Application()
    app.router.add_get("/airquality", _air_quality)
    app.router.add_get("/null", _null)
    app.router.add_get("/broken", _broken)
    app.router.add_get("/not-json", _not_json)
    app.router.add_get("/not-utf8", _not_utf8)
    async with _serve(app) as http_transport:
        yield http_transport


@pytest.mark.asyncio
async def test_get_json_passes_query_params(transport: HttpTransport) -> None:
    body = await transport.get_json("/airquality", {"lat": "41.39", "lon": "2.11", "distancia": "500"})
    assert body == [[41.39, 2.11, 0.2]]


@pytest.mark.asyncio
async def test_null_body_is_returned_as_none(transport: HttpTransport) -> None:
    assert await transport.get_json("/null", {}) is None


@pytest.mark.asyncio
async def test_non_200_raises(transport: HttpTransport) -> None:
    with pytest.raises(RoadAirTransportError) as excinfo:
        await transport.get_json("/broken", {})
    assert excinfo.value.status_code == 500
    assert excinfo.value.endpoint == "/broken"


@pytest.mark.asyncio
async def test_invalid_json_raises(transport: HttpTransport) -> None:
    with pytest.raises(RoadAirTransportError, match="Invalid JSON"):
        await transport.get_json("/not-json", {})


@pytest.mark.asyncio
async def test_connection_failure_raises() -> None:
    async with aiohttp.ClientSession() as session:
        transport = HttpTransport(RoadAirConfig(base_url="http://127.0.0.1:1", request_timeout=2.0), session)
        with pytest.raises(RoadAirTransportError):
            await transport.get_json("/roads", {})


@pytest.mark.asyncio
async def test_body_that_is_not_utf8_raises(transport: HttpTransport) -> None:
    with pytest.raises(RoadAirTransportError, match="Invalid JSON") as excinfo:
        await transport.get_json("/not-utf8", {})
    assert excinfo.value.endpoint == "/not-utf8"
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


@pytest.mark.asyncio
async def test_undecodable_backend_body_fails_the_load() -> None:
    app = web.Application()
    app.router.add_get("/airquality", _not_utf8)
    app.router.add_get("/roads", _not_utf8)
    store = MapStateStore()

    async with _serve(app) as http_transport:
        coordinator = DataLoadCoordinator(RoadAirConfig(), http_transport, store)
        result = await coordinator.load(41.39, 2.11, 500, datetime(2023, 1, 1, 2, tzinfo=UTC))

    assert result.status == LoadStatus.FAILED
    assert isinstance(result.error, RoadAirTransportError)
    assert store.snapshot is None
    assert coordinator.load_state.is_loading is False
