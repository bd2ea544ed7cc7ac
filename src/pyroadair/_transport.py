"""HTTP transport for the backend data service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyroadair.config import RoadAirConfig
from pyroadair.exceptions import RoadAirTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        ...


class HttpTransport:
    """JSON-over-HTTP GET transport bound to the configured base URL."""

    def __init__(self, config: RoadAirConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        """Send a GET request and return the decoded JSON body.

        Any JSON value is returned as-is (including ``None``); shape checks
        belong to the endpoint modules.

        Raises
        ------
        RoadAirTransportError
            On connection failure, timeout, non-200 status, or a body that is
            not UTF-8 encoded JSON.
        """
        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("GET %s params=%s", url, dict(params))

        try:
            async with self._http.get(url, params=dict(params), timeout=self._timeout) as resp:
                body = await resp.read()
                if resp.status != 200:
                    raise RoadAirTransportError(
                        f"HTTP {resp.status} from {endpoint}: {body[:200]!r}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except RoadAirTransportError:
            raise
        except TimeoutError as exc:
            raise RoadAirTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise RoadAirTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RoadAirTransportError(
                f"Invalid JSON from {endpoint}: {body[:200]!r}",
                endpoint=endpoint,
            ) from exc
