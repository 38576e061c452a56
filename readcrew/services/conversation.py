"""
Conversation Engine

Drives the multi-turn recommendation chat and the single-shot lookups.

Chat stages are implied by (exchange_count, has_recommended, wants_more):

    exchange 1           -> ask one clarifying question, no recommendations
    exchange 2-3 / "more" -> model decides: recommend or ask once more
    exchange >= 3        -> if the model gave no books, serve catalog books
                            (page 1 first, then the next full page each turn)

has_recommended only ever goes False -> True and is fed back into the next
turn's instruction. Every generative failure (no client, transport error,
unparseable reply) degrades to the fallback catalog; nothing is retried and
nothing is surfaced to the caller as an error.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError

from ..models import BookDetails, BookRecommendation
from .catalog import FallbackCatalog
from .extractor import extract_array, extract_object, extract_recommendations, strip_hidden_block, validate_books
from .fallback import SOURCE_FALLBACK, SOURCE_GENERATIVE, Sourced, first_available
from .llm_client import GenerativeClient
from .prompts import (
    build_character_prompt,
    build_chat_instruction,
    build_details_prompt,
    build_recommend_prompt,
    build_similar_prompt,
)
from .session_store import Session, SessionStore

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 14
FORCE_RECOMMEND_AT = 3
OFFLINE_RECOMMEND_AT = 2

MORE_VOCABULARY = ("more", "another", "different")
_MORE_RE = re.compile(r"\b(?:" + "|".join(MORE_VOCABULARY) + r")\b", re.IGNORECASE)

CLARIFYING_QUESTION = (
    "I'd love to help you find your next read! What kind of book are you in the mood for: "
    "a genre, a feeling, or a book you loved recently?"
)
OFFLINE_RECOMMEND_REPLY = "Here are some books our readers keep coming back to. I think you'll find something you love!"
RECOMMEND_INTRO = "Here are some books I think you'll love!"
INVITATION = "Here are a few picks to get you started. Tell me what you think, or ask for more and I'll find different ones!"


def wants_more_books(message: str) -> bool:
    """Whole-word, case-insensitive match against the 'more/different' vocabulary."""
    return bool(_MORE_RE.search(message))


@dataclass(frozen=True)
class ChatTurnResult:
    reply: str
    recommendations: List[BookRecommendation]
    session_id: str
    exchange_count: int
    source: str

    @property
    def has_recommendations(self) -> bool:
        return bool(self.recommendations)


@dataclass(frozen=True)
class CharacterMatch:
    analysis: str
    books: List[BookRecommendation]


class ConversationEngine:
    """Chat state machine plus single-shot recommendation lookups."""

    def __init__(self, client: Optional[GenerativeClient], catalog: FallbackCatalog, sessions: SessionStore):
        self.client = client
        self.catalog = catalog
        self.sessions = sessions

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    async def handle_turn(self, session_id: str, message: str) -> ChatTurnResult:
        """Run one chat exchange and record both sides in the session history."""
        session = self.sessions.get_or_create(session_id)
        session.add("user", message)
        session.exchange_count += 1
        wants_more = wants_more_books(message)

        if self.client is None:
            result = self._offline_turn(session)
        else:
            instruction = build_chat_instruction(session.exchange_count, session.has_recommended, wants_more)
            history = session.recent_history(HISTORY_WINDOW)
            try:
                text = await self.client.complete(instruction, history, temperature=0.8, max_tokens=1500)
            except Exception as e:
                logger.warning("[chat] session=%s generative call failed: %s: %s", session_id, type(e).__name__, e)
                result = self._offline_turn(session)
            else:
                result = self._model_turn(session, text, wants_more)

        session.add("assistant", result.reply)
        self.sessions.upsert(session)
        logger.info(
            "[chat] session=%s exchange=%d books=%d source=%s",
            session_id, result.exchange_count, len(result.recommendations), result.source,
        )
        return result

    def _offline_turn(self, session: Session) -> ChatTurnResult:
        """Deterministic reply used when the generative service is absent or failed."""
        if session.exchange_count >= OFFLINE_RECOMMEND_AT:
            session.has_recommended = True
            books = self._rotation(session, OFFLINE_RECOMMEND_AT)
            return self._result(session, OFFLINE_RECOMMEND_REPLY, books, SOURCE_FALLBACK)
        return self._result(session, CLARIFYING_QUESTION, [], SOURCE_FALLBACK)

    def _model_turn(self, session: Session, text: str, wants_more: bool) -> ChatTurnResult:
        found = extract_recommendations(text)
        visible = strip_hidden_block(found.visible_text if found else text)
        books = list(found.payload) if found else []
        source = SOURCE_GENERATIVE

        if books and session.exchange_count == 1 and not wants_more:
            logger.info("[chat] session=%s recommendations withheld on the clarifying turn", session.session_id)
            books = []

        if books:
            session.has_recommended = True
        elif session.exchange_count >= FORCE_RECOMMEND_AT:
            books = self._rotation(session, FORCE_RECOMMEND_AT)
            visible = f"{visible}\n\n{INVITATION}" if visible else INVITATION
            session.has_recommended = True
            source = SOURCE_FALLBACK

        if not visible:
            visible = RECOMMEND_INTRO if books else CLARIFYING_QUESTION
        return self._result(session, visible, books, source)

    def _rotation(self, session: Session, first_exchange: int) -> List[BookRecommendation]:
        """Catalog page 1 on the first catalog-served exchange, then the next full page on each later one."""
        return self.catalog.full_page(session.exchange_count - first_exchange + 1)

    @staticmethod
    def _result(session: Session, reply: str, books: List[BookRecommendation], source: str) -> ChatTurnResult:
        return ChatTurnResult(
            reply=reply,
            recommendations=list(books),
            session_id=session.session_id,
            exchange_count=session.exchange_count,
            source=source,
        )

    # ------------------------------------------------------------------
    # Single-shot lookups
    # ------------------------------------------------------------------

    async def _ask(self, prompt: tuple, max_tokens: int = 1500) -> Optional[str]:
        if self.client is None:
            return None
        system, user = prompt
        return await self.client.complete(
            system, [{"role": "user", "content": user}], temperature=0.7, max_tokens=max_tokens
        )

    async def recommend(self, query: str, page: int = 1) -> Sourced:
        """Books for a free-text query; catalog page `page` when the model can't help."""

        async def generate_recommendations() -> Optional[Sourced]:
            found = extract_recommendations(await self._ask(build_recommend_prompt(query, page)))
            return Sourced(found.payload, SOURCE_GENERATIVE) if found else None

        return await first_available(
            "recommend",
            [generate_recommendations],
            lambda: Sourced(self.catalog.page(page), SOURCE_FALLBACK),
        )

    async def character_search(self, character: str, from_book: Optional[str] = None) -> Sourced:
        """Analysis of a character plus books with similar characters."""

        async def generate_character_match() -> Optional[Sourced]:
            found = extract_object(await self._ask(build_character_prompt(character, from_book)))
            if not found:
                return None
            books = validate_books(found.payload.get("recommendations") or [])
            if not books:
                return None
            analysis = found.payload.get("characterAnalysis")
            if not isinstance(analysis, str) or not analysis.strip():
                analysis = _character_intro(character)
            return Sourced(CharacterMatch(analysis.strip(), books), SOURCE_GENERATIVE)

        return await first_available(
            "character",
            [generate_character_match],
            lambda: Sourced(CharacterMatch(_character_intro(character), self.catalog.page(1)), SOURCE_FALLBACK),
        )

    async def similar_books(self, title: str, author: Optional[str] = None) -> Sourced:
        key = title.strip().lower()

        async def generate_similar() -> Optional[Sourced]:
            found = extract_array(await self._ask(build_similar_prompt(title, author)))
            if not found:
                return None
            books = [b for b in validate_books(found.payload) if b.title.lower() != key]
            return Sourced(books, SOURCE_GENERATIVE) if books else None

        return await first_available(
            "similar",
            [generate_similar],
            lambda: Sourced(self.catalog.similar_to(title), SOURCE_FALLBACK),
        )

    async def book_details(self, book_name: str, author: Optional[str] = None) -> Sourced:

        async def generate_details() -> Optional[Sourced]:
            found = extract_object(await self._ask(build_details_prompt(book_name, author), max_tokens=1000))
            if not found:
                return None
            try:
                details = BookDetails.model_validate(found.payload)
            except ValidationError as e:
                logger.info("[details] discarded invalid details for %r: %s", book_name, e.errors()[:1])
                return None
            return Sourced(details, SOURCE_GENERATIVE)

        return await first_available(
            "details",
            [generate_details],
            lambda: Sourced(self.catalog.details_for(book_name, author), SOURCE_FALLBACK),
        )


def _character_intro(character: str) -> str:
    return f'Fans of "{character}" will enjoy books with similar characters:'
