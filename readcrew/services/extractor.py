"""
Recommendation Extractor

Pulls a machine-readable payload out of freeform model output.

The model is asked to hide its JSON between REC_START / REC_END markers, or
(for single-shot endpoints) to answer with bare JSON. Neither is guaranteed:
replies may be wrapped in markdown fences, surrounded by prose, or simply not
contain JSON at all. Anything that fails to decode or validate is reported as
"no payload" (None), never as an error.

Usage:
    from readcrew.services.extractor import extract_recommendations

    found = extract_recommendations(reply_text)
    if found:
        books, visible = found.payload, found.visible_text
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Optional, TypeVar

from pydantic import ValidationError

from ..models import BookRecommendation

logger = logging.getLogger(__name__)

REC_START = "<!--REC_START-->"
REC_END = "<!--REC_END-->"

_BLOCK_RE = re.compile(re.escape(REC_START) + r"([\s\S]*?)" + re.escape(REC_END))
_FENCED_RE = re.compile(r"^```[\w-]*\s*([\s\S]*?)\s*```$")
_EMPTY_FENCE_RE = re.compile(r"```[\w-]*\s*```")
_BLANK_LINES_RE = re.compile(r"\n{3,}")

T = TypeVar("T")


@dataclass(frozen=True)
class ExtractedPayload(Generic[T]):
    """Decoded payload plus the reply text with the machine block removed."""
    payload: T
    visible_text: str


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` (or bare ```) wrapper, if any."""
    text = text.strip()
    match = _FENCED_RE.match(text)
    return match.group(1).strip() if match else text


def _tidy(text: str) -> str:
    text = _EMPTY_FENCE_RE.sub("", text)
    return _BLANK_LINES_RE.sub("\n\n", text).strip()


def strip_hidden_block(text: str) -> str:
    """Drop every REC_START/REC_END block, decodable or not."""
    return _tidy(_BLOCK_RE.sub("", text))


def _bracket_span(text: str, opener: str, closer: str) -> Optional[tuple]:
    """Greedy outermost match: first opener to last closer."""
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        return None
    return start, end + 1


def _decode(raw: str, opener: str, closer: str) -> Any:
    body = strip_code_fences(raw)
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        pass
    span = _bracket_span(body, opener, closer)
    if not span:
        return None
    try:
        return json.loads(body[span[0]:span[1]])
    except json.JSONDecodeError:
        return None


def _extract(text: Optional[str], opener: str, closer: str, expected: type) -> Optional[ExtractedPayload]:
    if not text or not text.strip():
        return None

    block = _BLOCK_RE.search(text)
    if block:
        decoded = _decode(block.group(1), opener, closer)
        visible = text[:block.start()] + text[block.end():]
    else:
        span = _bracket_span(text, opener, closer)
        if not span:
            return None
        decoded = _decode(text[span[0]:span[1]], opener, closer)
        visible = text[:span[0]] + text[span[1]:]

    if not isinstance(decoded, expected):
        return None
    if expected is list and not decoded:
        return None
    return ExtractedPayload(payload=decoded, visible_text=_tidy(visible))


def extract_array(text: Optional[str]) -> Optional[ExtractedPayload[list]]:
    """Find a non-empty JSON array (delimited block first, then bracket match)."""
    return _extract(text, "[", "]", list)


def extract_object(text: Optional[str]) -> Optional[ExtractedPayload[dict]]:
    """Find a JSON object (delimited block first, then brace match)."""
    return _extract(text, "{", "}", dict)


def validate_books(items: Iterable[Any]) -> List[BookRecommendation]:
    """Keep the entries that validate as BookRecommendation; drop the rest."""
    books = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            books.append(BookRecommendation.model_validate(item))
        except ValidationError as e:
            logger.debug("[extract] dropped invalid book entry: %s", e.errors()[:1])
    return books


def extract_recommendations(text: Optional[str]) -> Optional[ExtractedPayload[List[BookRecommendation]]]:
    """Array extraction plus schema validation. None unless at least one book survives."""
    found = extract_array(text)
    if not found:
        return None
    books = validate_books(found.payload)
    if not books:
        return None
    return ExtractedPayload(payload=books, visible_text=found.visible_text)
