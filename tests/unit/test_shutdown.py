"""Tests for graceful shutdown functionality."""

import asyncio

import pytest

from src.app.core.shutdown import RequestTracker

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


class TestRequestTracker:
    async def test_request_tracking(self):
        tracker = RequestTracker()
        assert tracker.in_flight_count == 0
        assert not tracker.is_shutting_down

        async with tracker.track_request():
            assert tracker.in_flight_count == 1

        assert tracker.in_flight_count == 0

    async def test_counter_released_on_error(self):
        tracker = RequestTracker()
        with pytest.raises(RuntimeError):
            async with tracker.track_request():
                raise RuntimeError("handler failed")
        assert tracker.in_flight_count == 0

    async def test_shutdown_with_no_requests(self):
        tracker = RequestTracker()
        await tracker.start_shutdown()

        assert tracker.is_shutting_down
        assert await tracker.wait_for_drain(timeout=1.0)

    async def test_shutdown_waits_for_requests(self):
        tracker = RequestTracker()
        release = asyncio.Event()

        async def slow_request():
            async with tracker.track_request():
                await release.wait()

        task = asyncio.create_task(slow_request())
        await asyncio.sleep(0)
        await tracker.start_shutdown()

        waiter = asyncio.create_task(tracker.wait_for_drain(timeout=2.0))
        await asyncio.sleep(0.05)
        assert not waiter.done()

        release.set()
        assert await waiter
        await task

    async def test_shutdown_timeout(self):
        tracker = RequestTracker()
        release = asyncio.Event()

        async def stuck_request():
            async with tracker.track_request():
                await release.wait()

        task = asyncio.create_task(stuck_request())
        await asyncio.sleep(0)
        await tracker.start_shutdown()

        assert await tracker.wait_for_drain(timeout=0.05) is False
        assert tracker.in_flight_count == 1

        release.set()
        await task

    async def test_reset(self):
        tracker = RequestTracker()
        await tracker.start_shutdown()
        tracker.reset()
        assert not tracker.is_shutting_down
