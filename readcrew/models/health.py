"""Service status models for the root and health endpoints."""

from datetime import datetime
from typing import List, Optional

from .books import CamelModel


class GenerativeStatus(CamelModel):
    available: bool
    provider: Optional[str] = None
    configured_providers: List[str] = []


class TrendingCacheStatus(CamelModel):
    fresh: bool
    last_updated: Optional[datetime] = None
    size: int = 0


class HealthResponse(CamelModel):
    success: bool = True
    status: str = "healthy"
    generative: GenerativeStatus
    sessions: int
    trending_cache: TrendingCacheStatus
    background_jobs: bool


class RootResponse(HealthResponse):
    name: str = "ReadCrew Recommendation API"
