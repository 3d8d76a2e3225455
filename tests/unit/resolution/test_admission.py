"""Tests for the admission controller."""

from __future__ import annotations

import asyncio

import pytest

from sui_mvr.core.exceptions import TooManyConcurrentRequestsError
from sui_mvr.resolution.admission import AdmissionController


class TestAdmissionBasics:
    """Tests for permit accounting."""

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            AdmissionController(0)

    async def test_permit_accounting(self):
        admission = AdmissionController(2)

        async with admission.permit():
            assert admission.in_flight == 1
            assert admission.available == 1

        assert admission.in_flight == 0
        assert admission.available == 2

    async def test_released_on_error(self):
        """A permit is returned even when the block raises."""
        admission = AdmissionController(1)

        with pytest.raises(RuntimeError):
            async with admission.permit():
                raise RuntimeError("fetch failed")

        assert admission.in_flight == 0
        async with asyncio.timeout(1):
            async with admission.permit():
                pass


class TestAdmissionConcurrency:
    """Tests for bounding and cancellation."""

    async def test_bounds_in_flight(self):
        """No more than ``limit`` holders run at once."""
        admission = AdmissionController(3)
        peak = 0

        async def worker():
            nonlocal peak
            async with admission.permit():
                peak = max(peak, admission.in_flight)
                await asyncio.sleep(0.01)

        await asyncio.gather(*(worker() for _ in range(10)))

        assert peak == 3
        assert admission.in_flight == 0

    async def test_cancel_while_waiting(self):
        """Cancelling a waiter takes no permit."""
        admission = AdmissionController(1)
        entered = asyncio.Event()
        release = asyncio.Event()

        async def holder():
            async with admission.permit():
                entered.set()
                await release.wait()

        async def waiter():
            async with admission.permit():
                pass

        holding = asyncio.create_task(holder())
        await entered.wait()
        waiting = asyncio.create_task(waiter())
        await asyncio.sleep(0)
        waiting.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiting

        release.set()
        await holding

        assert admission.in_flight == 0
        assert admission.available == 1

    async def test_cancel_while_holding(self):
        """Cancelling a holder returns its permit."""
        admission = AdmissionController(1)
        entered = asyncio.Event()

        async def holder():
            async with admission.permit():
                entered.set()
                await asyncio.sleep(10)

        task = asyncio.create_task(holder())
        await entered.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert admission.in_flight == 0


class TestAdmissionClose:
    """Closing aborts waits with TooManyConcurrentRequestsError."""

    async def test_close_aborts_waiters(self):
        admission = AdmissionController(1)
        entered = asyncio.Event()
        release = asyncio.Event()

        async def holder():
            async with admission.permit():
                entered.set()
                await release.wait()

        async def waiter():
            async with admission.permit():
                pass

        holding = asyncio.create_task(holder())
        await entered.wait()
        waiters = [asyncio.create_task(waiter()) for _ in range(2)]
        await asyncio.sleep(0)

        admission.close()
        results = await asyncio.gather(*waiters, return_exceptions=True)

        assert all(isinstance(r, TooManyConcurrentRequestsError) for r in results)
        assert results[0].max_concurrent == 1
        release.set()
        await holding

    async def test_closed_rejects_new_permits(self):
        admission = AdmissionController(2)
        admission.close()

        assert admission.closed is True
        with pytest.raises(TooManyConcurrentRequestsError):
            async with admission.permit():
                pass
