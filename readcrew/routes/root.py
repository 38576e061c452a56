"""Root and health endpoints."""

from fastapi import APIRouter

from ..models import GenerativeStatus, HealthResponse, RootResponse, TrendingCacheStatus
from ..services.llm_client import get_available_providers
from ..state import get_state

router = APIRouter()


def _status() -> dict:
    state = get_state()
    entry = state.trending.entry
    return dict(
        generative=GenerativeStatus(
            available=state.generative_available,
            provider=state.config.llm_provider if state.generative_available else None,
            configured_providers=get_available_providers(),
        ),
        sessions=len(state.sessions),
        trending_cache=TrendingCacheStatus(
            fresh=state.trending.is_fresh(),
            last_updated=entry.last_updated if entry else None,
            size=len(entry.data) if entry else 0,
        ),
        background_jobs=state.jobs.running,
    )


@router.get("/", response_model=RootResponse)
def root():
    """Service banner plus status."""
    return RootResponse(**_status())


@router.get("/api/health", response_model=HealthResponse)
def health():
    return HealthResponse(**_status())
