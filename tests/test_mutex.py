"""
Tests for the FIFO Mutex
"""

import asyncio

import pytest

from storefront.services.mutex import Mutex


@pytest.mark.asyncio
async def test_lock_when_free_is_immediate():
    mutex = Mutex()

    await mutex.lock()

    assert mutex.locked is True
    mutex.unlock()
    assert mutex.locked is False


@pytest.mark.asyncio
async def test_unlock_without_lock_raises():
    with pytest.raises(RuntimeError):
        Mutex().unlock()


@pytest.mark.asyncio
async def test_waiters_resume_in_order():
    mutex = Mutex()
    order = []

    async def worker(name: str):
        async with mutex:
            order.append(name)
            await asyncio.sleep(0)

    await mutex.lock()
    tasks = [asyncio.create_task(worker(name)) for name in ("a", "b", "c")]
    await asyncio.sleep(0)
    assert order == []

    mutex.unlock()
    await asyncio.gather(*tasks)

    assert order == ["a", "b", "c"]
    assert mutex.locked is False


@pytest.mark.asyncio
async def test_ownership_passes_to_waiter():
    mutex = Mutex()
    await mutex.lock()
    waiter = asyncio.create_task(mutex.lock())
    await asyncio.sleep(0)

    mutex.unlock()

    assert mutex.locked is True
    await waiter
    mutex.unlock()
    assert mutex.locked is False


@pytest.mark.asyncio
async def test_cancelled_waiter_leaves_queue():
    mutex = Mutex()
    order = []

    async def worker(name: str):
        async with mutex:
            order.append(name)

    await mutex.lock()
    cancelled = asyncio.create_task(worker("cancelled"))
    kept = asyncio.create_task(worker("kept"))
    await asyncio.sleep(0)

    cancelled.cancel()
    await asyncio.sleep(0)
    mutex.unlock()
    await kept

    assert cancelled.cancelled()
    assert order == ["kept"]
    assert mutex.locked is False


@pytest.mark.asyncio
async def test_cancel_after_handover_releases_lock():
    mutex = Mutex()
    await mutex.lock()
    waiter = asyncio.create_task(mutex.lock())
    await asyncio.sleep(0)

    mutex.unlock()
    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert mutex.locked is False


@pytest.mark.asyncio
async def test_lock_released_on_error():
    mutex = Mutex()

    with pytest.raises(ValueError):
        async with mutex:
            raise ValueError("boom")

    assert mutex.locked is False
