"""Bounded-concurrency scheduler."""

import asyncio

import pytest

from rblscope.rbl.limiter import ConcurrencyLimiter


def test_never_exceeds_capacity_and_all_complete():
    async def scenario():
        limiter = ConcurrencyLimiter(3)
        active = 0
        peak = 0

        async def work(i):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return i

        futures = [limiter.submit(lambda i=i: work(i)) for i in range(20)]
        results = await asyncio.gather(*futures)
        return peak, results

    peak, results = asyncio.run(scenario())
    assert peak == 3
    assert results == list(range(20))


def test_failing_tasks_release_their_slot():
    async def scenario():
        limiter = ConcurrencyLimiter(2)

        async def work(i):
            await asyncio.sleep(0)
            if i % 2 == 0:
                raise RuntimeError(f"task {i} failed")
            return i

        futures = [limiter.submit(lambda i=i: work(i)) for i in range(10)]
        return await asyncio.gather(*futures, return_exceptions=True)

    outcomes = asyncio.run(scenario())
    assert len(outcomes) == 10
    assert [o for o in outcomes if not isinstance(o, Exception)] == [1, 3, 5, 7, 9]
    assert all(isinstance(outcomes[i], RuntimeError) for i in range(0, 10, 2))


def test_tasks_start_in_submission_order():
    async def scenario():
        limiter = ConcurrencyLimiter(1)
        started = []

        async def work(i):
            started.append(i)
            await asyncio.sleep(0)

        futures = [limiter.submit(lambda i=i: work(i)) for i in range(6)]
        await asyncio.gather(*futures)
        return started

    assert asyncio.run(scenario()) == [0, 1, 2, 3, 4, 5]


def test_active_and_pending_counts():
    async def scenario():
        limiter = ConcurrencyLimiter(2)
        gate = asyncio.Event()

        async def work():
            await gate.wait()

        for _ in range(5):
            limiter.submit(work)
        await asyncio.sleep(0.01)
        snapshot = (limiter.active, limiter.pending)
        gate.set()
        await limiter.drain()
        return snapshot, (limiter.active, limiter.pending)

    during, after = asyncio.run(scenario())
    assert during == (2, 3)
    assert after == (0, 0)


def test_drain_waits_for_failures_too():
    async def scenario():
        limiter = ConcurrencyLimiter(2)
        finished = []

        async def ok():
            await asyncio.sleep(0.01)
            finished.append("ok")

        async def boom():
            raise ValueError("boom")

        limiter.submit(ok)
        limiter.submit(boom)
        limiter.submit(ok)
        await limiter.drain()
        return finished

    assert asyncio.run(scenario()) == ["ok", "ok"]


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        ConcurrencyLimiter(0)
