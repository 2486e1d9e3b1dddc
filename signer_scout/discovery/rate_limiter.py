"""Fixed inter-call delay."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

SleepFn = Callable[[float], Awaitable[None]]


class RateLimiter:
    """
    Sleeps a fixed delay on every wait() call.

    Not adaptive: the delay does not grow on failures. A zero delay still
    yields to the event loop once.
    """

    def __init__(self, delay_sec: float, *, sleep: SleepFn | None = None) -> None:
        if delay_sec < 0:
            raise ValueError("delay_sec must be >= 0")
        self._delay = delay_sec
        self._sleep = sleep or asyncio.sleep

    @property
    def delay_sec(self) -> float:
        return self._delay

    async def wait(self) -> None:
        await self._sleep(self._delay)
