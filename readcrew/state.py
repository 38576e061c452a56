"""Application state: generative client, catalog, trending cache, sessions, engine."""

from typing import Optional

from .config import ServerConfig, get_config
from .services import (
    BackgroundJobs,
    ConversationEngine,
    FallbackCatalog,
    GenerativeClient,
    InMemorySessionStore,
    TrendingCache,
    create_client,
)

_UNSET = object()


class AppState:
    """Global application state."""

    def __init__(self, config: ServerConfig, client=_UNSET):
        self.config = config

        # None means "generative service unavailable": every request uses the catalog
        self.client: Optional[GenerativeClient] = create_client(config) if client is _UNSET else client

        self.catalog = FallbackCatalog()
        self.trending = TrendingCache(self.client, self.catalog, ttl=config.trending_ttl)
        self.sessions = InMemorySessionStore(retention=config.session_retention)
        self.engine = ConversationEngine(self.client, self.catalog, self.sessions)
        self.jobs = BackgroundJobs(
            self.sessions,
            self.trending,
            sweep_interval=config.session_sweep_interval_seconds,
            midnight_check_interval=config.midnight_check_interval_seconds,
        )

    @property
    def generative_available(self) -> bool:
        return self.client is not None


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState(get_config())
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace (or with None, reset) the global state."""
    global _state
    _state = state
