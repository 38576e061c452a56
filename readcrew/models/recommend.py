"""Session-less recommendation, lookup and trending models."""

from typing import Annotated, List, Optional

from pydantic import AfterValidator, Field

from .books import BookDetails, BookRecommendation, CamelModel


def _required_text(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


RequiredText = Annotated[str, AfterValidator(_required_text)]


class RecommendRequest(CamelModel):
    query: RequiredText
    page: int = Field(default=1, ge=1)


class RecommendResponse(CamelModel):
    success: bool = True
    recommendations: List[BookRecommendation]
    page: int
    has_more: bool
    source: str


class CharacterSearchRequest(CamelModel):
    character: RequiredText
    from_book: Optional[str] = None


class CharacterSearchResponse(CamelModel):
    success: bool = True
    character_analysis: str
    recommendations: List[BookRecommendation]
    source: str


class SimilarBooksRequest(CamelModel):
    title: RequiredText
    author: Optional[str] = None


class SimilarBooksResponse(CamelModel):
    success: bool = True
    recommendations: List[BookRecommendation]
    source: str


class BookDetailsRequest(CamelModel):
    book_name: RequiredText
    author: Optional[str] = None


class BookDetailsResponse(CamelModel):
    success: bool = True
    details: BookDetails
    source: str


class KeywordRecommendRequest(CamelModel):
    keywords: RequiredText


class KeywordRecommendResponse(CamelModel):
    success: bool = True
    recommendations: List[BookRecommendation]


class TrendingResponse(CamelModel):
    success: bool = True
    books: List[BookRecommendation]
    page: int
    has_more: bool
    cached: bool
    source: str
