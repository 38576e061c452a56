"""Trending, chat and AI-assisted book lookup endpoints.

Every endpoint here is total: generative failures come back as catalog
content with source="fallback", never as an error status. Only request
validation (422) is visible to the caller.
"""

from fastapi import APIRouter, Query

from ..models import (
    BookDetailsRequest,
    BookDetailsResponse,
    CharacterSearchRequest,
    CharacterSearchResponse,
    ChatRequest,
    ChatResponse,
    RecommendRequest,
    RecommendResponse,
    SimilarBooksRequest,
    SimilarBooksResponse,
    TrendingResponse,
)
from ..state import get_state

router = APIRouter()

TRENDING_PAGES = 6
RECOMMEND_PAGES = 5


@router.get("/trending", response_model=TrendingResponse)
async def trending(
    page: int = Query(1, ge=1),
    refresh: bool = Query(False, description="Bypass the page-1 cache"),
):
    """Trending books; page 1 is cached for the TTL window."""
    result = await get_state().trending.get_trending(page, force=refresh)
    return TrendingResponse(
        books=result.books,
        page=page,
        has_more=page < TRENDING_PAGES,
        cached=result.cached,
        source=result.source,
    )


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """One exchange of the recommendation chat."""
    result = await get_state().engine.handle_turn(request.session_id, request.message)
    return ChatResponse(
        reply=result.reply,
        has_recommendations=result.has_recommendations,
        recommendations=result.recommendations,
        session_id=result.session_id,
        exchange_count=result.exchange_count,
    )


@router.post("/recommend", response_model=RecommendResponse)
async def recommend(request: RecommendRequest):
    """Direct search: five books per page for a free-text query."""
    result = await get_state().engine.recommend(request.query, request.page)
    return RecommendResponse(
        recommendations=result.value,
        page=request.page,
        has_more=request.page < RECOMMEND_PAGES,
        source=result.source,
    )


@router.post("/character-search", response_model=CharacterSearchResponse)
async def character_search(request: CharacterSearchRequest):
    result = await get_state().engine.character_search(request.character, request.from_book)
    return CharacterSearchResponse(
        character_analysis=result.value.analysis,
        recommendations=result.value.books,
        source=result.source,
    )


@router.post("/similar", response_model=SimilarBooksResponse)
async def similar_books(request: SimilarBooksRequest):
    result = await get_state().engine.similar_books(request.title, request.author)
    return SimilarBooksResponse(recommendations=result.value, source=result.source)


@router.post("/book-details", response_model=BookDetailsResponse)
async def book_details(request: BookDetailsRequest):
    result = await get_state().engine.book_details(request.book_name, request.author)
    return BookDetailsResponse(details=result.value, source=result.source)
