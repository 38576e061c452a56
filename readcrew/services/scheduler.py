"""
Background jobs run on the app's event loop.

- startup: one forced page-1 trending refresh (best effort)
- sweep: drop expired chat sessions every interval
- midnight: force a trending refresh once during local hour 0

Each loop finishes its tick before sleeping again, so a job never overlaps
with itself. Failures are logged and the loop carries on.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Awaitable, Callable, List, Optional

from .session_store import SessionStore
from .trending_cache import TrendingCache

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    return datetime.now()


class BackgroundJobs:
    def __init__(
        self,
        sessions: SessionStore,
        trending: TrendingCache,
        sweep_interval: float = 3600.0,
        midnight_check_interval: float = 60.0,
        clock: Callable[[], datetime] = local_now,
    ):
        self.sessions = sessions
        self.trending = trending
        self.sweep_interval = sweep_interval
        self.midnight_check_interval = midnight_check_interval
        self._clock = clock
        self._last_midnight_refresh: Optional[date] = None
        self._tasks: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def start(self) -> None:
        if self.running:
            return
        self._tasks = [
            asyncio.create_task(self.warm_trending(), name="trending-warmup"),
            asyncio.create_task(self._every(self.sweep_interval, self.sweep_sessions, "sweep"), name="session-sweep"),
            asyncio.create_task(
                self._every(self.midnight_check_interval, self.check_midnight, "midnight"),
                name="midnight-refresh",
            ),
        ]
        logger.info("[startup] Background jobs started (sweep every %ss)", self.sweep_interval)

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []

    async def _every(self, interval: float, job: Callable[[], Awaitable], name: str) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                await job()
            except Exception:
                logger.exception("[%s] background tick failed", name)

    async def warm_trending(self) -> None:
        try:
            result = await self.trending.refresh()
        except Exception:
            logger.exception("[startup] trending warm-up failed")
            return
        logger.info("[startup] Trending warm-up: %d books from %s", len(result.books), result.source)

    async def sweep_sessions(self) -> None:
        self.sessions.sweep()

    async def check_midnight(self) -> bool:
        """Refresh trending once per local day, on the first check inside hour 0."""
        now = self._clock()
        if now.hour != 0 or self._last_midnight_refresh == now.date():
            return False
        self._last_midnight_refresh = now.date()
        result = await self.trending.refresh()
        logger.info("[midnight] Trending refresh: %d books from %s", len(result.books), result.source)
        return True
