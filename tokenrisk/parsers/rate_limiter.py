import asyncio


class RateLimiter:
    """Minimum-interval rate limiter for async HTTP clients.

    One instance is shared by every concurrent scoring call that goes through
    the same client; max_rps <= 0 disables limiting.
    """

    def __init__(self, max_rps: float) -> None:
        self._min_interval = 1.0 / max_rps if max_rps > 0 else 0.0
        self._next_slot = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        if self._min_interval <= 0:
            return
        async with self._lock:
            now = asyncio.get_running_loop().time()
            wait = self._next_slot - now
            if wait > 0:
                await asyncio.sleep(wait)
                now += wait
            self._next_slot = now + self._min_interval
