"""
Trending Cache

Single-slot, TTL-bound cache of page 1 of the trending-books list.

- Page 1 is served from the cache while it is fresh (unless forced).
- Stale, forced and page > 1 requests ask the generative service; only a
  successful page-1 answer replaces the cache entry.
- Every failure degrades to the fallback catalog. A failed refresh never
  touches the existing entry, so an older fresh entry keeps being served.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from ..models import BookRecommendation
from .catalog import FallbackCatalog
from .extractor import extract_recommendations
from .fallback import SOURCE_FALLBACK, SOURCE_GENERATIVE, Sourced, first_available, utcnow
from .llm_client import GenerativeClient
from .prompts import build_trending_prompt

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class TrendingCacheEntry:
    data: Tuple[BookRecommendation, ...]
    last_updated: datetime


@dataclass(frozen=True)
class TrendingResult:
    books: List[BookRecommendation]
    cached: bool
    source: str


class TrendingCache:
    """Page-1 trending cache with generative refresh and catalog fallback."""

    def __init__(
        self,
        client: Optional[GenerativeClient],
        catalog: FallbackCatalog,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.client = client
        self.catalog = catalog
        self.ttl = ttl
        self._clock = clock
        self._entry: Optional[TrendingCacheEntry] = None

    @property
    def entry(self) -> Optional[TrendingCacheEntry]:
        return self._entry

    def is_fresh(self) -> bool:
        entry = self._entry
        if entry is None or not entry.data:
            return False
        return self._clock() - entry.last_updated < self.ttl

    async def get_trending(self, page: int = 1, force: bool = False) -> TrendingResult:
        """Return (books, cached, source) for a page. Never raises for page >= 1."""
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")

        entry = self._entry
        if page == 1 and not force and self.is_fresh():
            return TrendingResult(books=list(entry.data), cached=True, source=SOURCE_GENERATIVE)

        async def generate_trending_page() -> Optional[Sourced]:
            if self.client is None:
                return None
            system, user = build_trending_prompt(page, self._clock().date(), self.catalog.page_size)
            text = await self.client.complete(
                system, [{"role": "user", "content": user}], temperature=0.7, max_tokens=2000
            )
            found = extract_recommendations(text)
            return Sourced(found.payload, SOURCE_GENERATIVE) if found else None

        result = await first_available(
            "trending",
            [generate_trending_page],
            lambda: Sourced(self.catalog.page(page), SOURCE_FALLBACK),
        )

        if page == 1 and result.source == SOURCE_GENERATIVE:
            # One assignment: readers see the old entry or the new one, never a mix.
            self._entry = TrendingCacheEntry(data=tuple(result.value), last_updated=self._clock())
            logger.info("[trending] cache refreshed with %d books", len(result.value))

        return TrendingResult(books=list(result.value), cached=False, source=result.source)

    async def refresh(self) -> TrendingResult:
        """Force a page-1 refresh (startup and the midnight job)."""
        return await self.get_trending(1, force=True)
