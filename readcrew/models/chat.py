"""Chat-related Pydantic models."""

from typing import List, Optional

from pydantic import field_validator

from .books import BookRecommendation, CamelModel

DEFAULT_SESSION_ID = "default"


class ChatRequest(CamelModel):
    message: str
    session_id: Optional[str] = DEFAULT_SESSION_ID

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("message cannot be empty")
        return v

    @field_validator("session_id")
    @classmethod
    def session_id_or_default(cls, v: Optional[str]) -> str:
        if v is None:
            return DEFAULT_SESSION_ID
        return v.strip() or DEFAULT_SESSION_ID


class ChatResponse(CamelModel):
    success: bool = True
    reply: str
    has_recommendations: bool
    recommendations: List[BookRecommendation] = []
    session_id: str
    exchange_count: int
