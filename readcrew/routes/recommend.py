"""Keyword recommendations straight from the catalog (no generative call)."""

from fastapi import APIRouter

from ..models import KeywordRecommendRequest, KeywordRecommendResponse
from ..state import get_state

router = APIRouter()


@router.post("", response_model=KeywordRecommendResponse)
def recommend_by_keywords(request: KeywordRecommendRequest):
    """Genre keywords found in the text pick catalog books; a default set otherwise."""
    books = get_state().catalog.match_keywords(request.keywords)
    return KeywordRecommendResponse(recommendations=books)
