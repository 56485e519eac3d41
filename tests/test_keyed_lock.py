"""Tests for per-key asyncio locks."""

import asyncio

import pytest

from app.services.keyed_lock import KeyedLock


class TestKeyedLock:
    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self):
        locks = KeyedLock()
        active = 0
        peak = 0

        async def worker():
            nonlocal active, peak
            async with locks.hold("seattle"):
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1

        await asyncio.gather(*(worker() for _ in range(4)))
        assert peak == 1

    @pytest.mark.asyncio
    async def test_different_keys_run_concurrently(self):
        locks = KeyedLock()
        entered = asyncio.Event()

        async def first():
            async with locks.hold("a"):
                await asyncio.wait_for(entered.wait(), timeout=1)

        async def second():
            async with locks.hold("b"):
                entered.set()

        await asyncio.gather(first(), second())

    @pytest.mark.asyncio
    async def test_lock_released_after_use(self):
        locks = KeyedLock()
        async with locks.hold(("weathers", 5)):
            assert ("weathers", 5) in locks
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_lock_released_on_error(self):
        locks = KeyedLock()
        with pytest.raises(RuntimeError):
            async with locks.hold("k"):
                raise RuntimeError("boom")
        assert "k" not in locks
