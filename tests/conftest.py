from __future__ import annotations

import asyncio

import pytest


class FakeTimer:
    """Sleep replacement for the playback timer, released one tick at a time."""

    def __init__(self) -> None:
        self.delays: list[float] = []
        self._waiters: list[asyncio.Future[None]] = []

    async def sleep(self, delay: float) -> None:
        self.delays.append(delay)
        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        finally:
            self._waiters.remove(waiter)

    async def _settle(self) -> None:
        for _ in range(5):
            await asyncio.sleep(0)

    async def fire(self, count: int = 1) -> None:
        """Let *count* pending sleeps return, one after the other."""
        for _ in range(count):
            await self._settle()
            pending = [waiter for waiter in self._waiters if not waiter.done()]
            if pending:
                pending[0].set_result(None)
            await self._settle()


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()
