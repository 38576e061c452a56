"""Backing logic: catalog, caches, stores, generative client, engine."""

from .catalog import FALLBACK_BOOKS, FallbackCatalog
from .conversation import ChatTurnResult, CharacterMatch, ConversationEngine, wants_more_books
from .extractor import (
    REC_END,
    REC_START,
    ExtractedPayload,
    extract_array,
    extract_object,
    extract_recommendations,
)
from .fallback import SOURCE_FALLBACK, SOURCE_GENERATIVE, Sourced, first_available
from .llm_client import GenerativeClient, LiteLLMClient, create_client
from .scheduler import BackgroundJobs
from .session_store import InMemorySessionStore, Session, SessionStore
from .trending_cache import TrendingCache, TrendingCacheEntry, TrendingResult

__all__ = [
    "FALLBACK_BOOKS",
    "FallbackCatalog",
    "ChatTurnResult",
    "CharacterMatch",
    "ConversationEngine",
    "wants_more_books",
    "REC_END",
    "REC_START",
    "ExtractedPayload",
    "extract_array",
    "extract_object",
    "extract_recommendations",
    "SOURCE_FALLBACK",
    "SOURCE_GENERATIVE",
    "Sourced",
    "first_available",
    "GenerativeClient",
    "LiteLLMClient",
    "create_client",
    "BackgroundJobs",
    "InMemorySessionStore",
    "Session",
    "SessionStore",
    "TrendingCache",
    "TrendingCacheEntry",
    "TrendingResult",
]
