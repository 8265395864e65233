"""Drain in-flight API requests before the process exits."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.app.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts requests in progress; once shutdown starts, signals when none remain.

    Runs on a single event loop, so the counter is only touched between awaits.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._in_flight = 0
        self._shutting_down = False
        self._idle = asyncio.Event()

    @property
    def is_shutting_down(self) -> bool:
        return self._shutting_down

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    def _signal_if_idle(self) -> None:
        if self._shutting_down and self._in_flight == 0:
            self._idle.set()

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1
            self._signal_if_idle()

    async def start_shutdown(self) -> None:
        self._shutting_down = True
        logger.info("Draining requests before shutdown", in_flight=self._in_flight)
        self._signal_if_idle()

    async def wait_for_drain(self, timeout: float) -> bool:
        """Block until idle. Returns False if requests outlived ``timeout`` seconds."""
        try:
            async with asyncio.timeout(timeout):
                await self._idle.wait()
        except TimeoutError:
            logger.warning("Requests still running at shutdown", in_flight=self._in_flight, timeout=timeout)
            return False
        logger.info("Requests drained")
        return True


request_tracker = RequestTracker()
