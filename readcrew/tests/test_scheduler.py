"""
Background Job Tests

The midnight refresh fires once per local day inside hour 0; the sweep
delegates to the session store; start/stop manage the asyncio tasks.

Run:
----
    pytest readcrew/tests/test_scheduler.py -v
"""

import asyncio
import json
from datetime import datetime, timedelta

from conftest import FakeClock, book_dicts

from readcrew.services import BackgroundJobs, InMemorySessionStore, TrendingCache


def _jobs(trending, sessions=None, clock=None):
    return BackgroundJobs(
        sessions if sessions is not None else InMemorySessionStore(),
        trending,
        sweep_interval=3600,
        midnight_check_interval=60,
        clock=clock or FakeClock(datetime(2026, 1, 15, 23, 58)),
    )


class TestMidnightRefresh:

    def test_fires_once_per_day_in_hour_zero(self, catalog, stub_client):
        client = stub_client(json.dumps(book_dicts("Fresh")))
        clock = FakeClock(datetime(2026, 1, 15, 23, 58))
        jobs = _jobs(TrendingCache(client, catalog), clock=clock)

        assert asyncio.run(jobs.check_midnight()) is False
        clock.advance(minutes=3)
        assert asyncio.run(jobs.check_midnight()) is True
        clock.advance(minutes=1)
        assert asyncio.run(jobs.check_midnight()) is False
        clock.advance(minutes=58)
        assert asyncio.run(jobs.check_midnight()) is False

        clock.advance(hours=23)
        assert asyncio.run(jobs.check_midnight()) is True
        assert len(client.calls) == 2

    def test_refresh_replaces_cache_entry(self, catalog, stub_client):
        trending = TrendingCache(stub_client(json.dumps(book_dicts("Fresh"))), catalog)
        jobs = _jobs(trending, clock=FakeClock(datetime(2026, 1, 16, 0, 5)))

        asyncio.run(jobs.check_midnight())

        assert trending.entry is not None
        assert trending.entry.data[0].title == "Fresh 1"


class TestSweep:

    def test_sweep_delegates_to_store(self, catalog, clock):
        sessions = InMemorySessionStore(retention=timedelta(hours=2), clock=clock)
        sessions.get_or_create("stale")
        clock.advance(hours=3)
        jobs = _jobs(TrendingCache(None, catalog), sessions=sessions)

        asyncio.run(jobs.sweep_sessions())

        assert len(sessions) == 0


class TestLifecycle:

    def test_start_and_stop(self, catalog):
        jobs = _jobs(TrendingCache(None, catalog))

        async def run():
            jobs.start()
            assert jobs.running is True
            jobs.start()
            assert len(jobs._tasks) == 3
            await jobs.stop()

        asyncio.run(run())

        assert jobs.running is False

    def test_warm_up_survives_a_failing_service(self, catalog, stub_client):
        trending = TrendingCache(stub_client(RuntimeError("down")), catalog)

        asyncio.run(_jobs(trending).warm_trending())

        assert trending.entry is None
