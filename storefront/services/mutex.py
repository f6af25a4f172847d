"""FIFO lock for asyncio code"""

import asyncio
from collections import deque


class Mutex:
    """
    Mutual exclusion lock that wakes waiters strictly in arrival order.

    ``unlock()`` hands ownership straight to the oldest waiter, so the lock
    never looks free while someone is queued for it.
    """

    def __init__(self):
        self._locked = False
        self._waiters: deque[asyncio.Future] = deque()

    @property
    def locked(self) -> bool:
        return self._locked

    async def lock(self) -> None:
        """Acquire the lock, queueing behind earlier callers if it is held"""
        if not self._locked:
            self._locked = True
            return

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # Ownership arrived together with the cancellation
                self.unlock()
            elif waiter in self._waiters:
                self._waiters.remove(waiter)
            raise

    def unlock(self) -> None:
        """Release the lock or pass it to the next waiter"""
        if not self._locked:
            raise RuntimeError("Mutex is not locked")

        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return

        self._locked = False

    async def __aenter__(self) -> "Mutex":
        await self.lock()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.unlock()
