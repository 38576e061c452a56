"""Pydantic request/response models for the API."""

from .books import BookDetails, BookRecommendation, CamelModel
from .chat import DEFAULT_SESSION_ID, ChatRequest, ChatResponse
from .health import GenerativeStatus, HealthResponse, RootResponse, TrendingCacheStatus
from .recommend import (
    BookDetailsRequest,
    BookDetailsResponse,
    CharacterSearchRequest,
    CharacterSearchResponse,
    KeywordRecommendRequest,
    KeywordRecommendResponse,
    RecommendRequest,
    RecommendResponse,
    SimilarBooksRequest,
    SimilarBooksResponse,
    TrendingResponse,
)

__all__ = [
    "BookDetails",
    "BookRecommendation",
    "CamelModel",
    "DEFAULT_SESSION_ID",
    "ChatRequest",
    "ChatResponse",
    "GenerativeStatus",
    "HealthResponse",
    "RootResponse",
    "TrendingCacheStatus",
    "BookDetailsRequest",
    "BookDetailsResponse",
    "CharacterSearchRequest",
    "CharacterSearchResponse",
    "KeywordRecommendRequest",
    "KeywordRecommendResponse",
    "RecommendRequest",
    "RecommendResponse",
    "SimilarBooksRequest",
    "SimilarBooksResponse",
    "TrendingResponse",
]
