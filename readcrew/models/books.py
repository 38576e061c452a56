"""Book value types shared by the engine, the catalog and the API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input; serializes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _loose_number(value, cast):
    """Coerce model-produced numbers like "4.5" or "12,000"; unusable values become None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return cast(value)
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        try:
            return cast(float(cleaned))
        except ValueError:
            return None
    return None


class BookRecommendation(CamelModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    genre: Optional[str] = None
    description: Optional[str] = None
    reason: Optional[str] = None
    trend_reason: Optional[str] = None
    rating: Optional[float] = None
    readers: Optional[int] = None
    pages: Optional[int] = None
    year: Optional[int] = None

    @field_validator("title", "author", mode="before")
    @classmethod
    def _strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("rating", mode="before")
    @classmethod
    def _coerce_rating(cls, v):
        return _loose_number(v, float)

    @field_validator("readers", "pages", "year", mode="before")
    @classmethod
    def _coerce_int(cls, v):
        return _loose_number(v, int)


class BookDetails(CamelModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    description: Optional[str] = None
    genre: Optional[str] = None
    rating: Optional[float] = None
    pages: Optional[int] = None
    year: Optional[int] = None
    themes: List[str] = []
    similar_books: List[str] = []

    @field_validator("rating", mode="before")
    @classmethod
    def _coerce_rating(cls, v):
        return _loose_number(v, float)

    @field_validator("pages", "year", mode="before")
    @classmethod
    def _coerce_int(cls, v):
        return _loose_number(v, int)
