"""
Bounded-parallelism task scheduling.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar


T = TypeVar("T")

DEFAULT_CAPACITY = 8


class ConcurrencyLimiter:
    """Run submitted tasks with at most `capacity` active at once.

    Tasks start in submission order. A slot is released when a task
    finishes, whether it returned or raised, so queued tasks always run.

    Usage:
        limiter = ConcurrencyLimiter(4)
        futures = [limiter.submit(lambda: fetch(x)) for x in items]
        results = await asyncio.gather(*futures)
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self._active = 0
        self._tasks: set[asyncio.Task] = set()

    @property
    def active(self) -> int:
        """Number of tasks currently running."""
        return self._active

    @property
    def pending(self) -> int:
        """Number of submitted tasks waiting for a slot."""
        return len(self._tasks) - self._active

    async def _run(self, task: Callable[[], Awaitable[T]]) -> T:
        async with self._semaphore:
            self._active += 1
            try:
                return await task()
            finally:
                self._active -= 1

    def submit(self, task: Callable[[], Awaitable[T]]) -> "asyncio.Task[T]":
        """Schedule task() and return a future for its outcome.

        Must be called from within a running event loop.
        """
        future = asyncio.ensure_future(self._run(task))
        self._tasks.add(future)
        future.add_done_callback(self._tasks.discard)
        return future

    async def drain(self) -> None:
        """Wait until every submitted task has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
