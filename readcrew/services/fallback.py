"""Ordered try-then-degrade chain used by every generative entry point."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Generic, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

SOURCE_GENERATIVE = "generative"
SOURCE_FALLBACK = "fallback"

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Sourced(Generic[T]):
    """A value tagged with where it came from."""
    value: T
    source: str


Step = Callable[[], Awaitable[Optional[Sourced]]]


async def first_available(label: str, steps: Sequence[Step], final: Callable[[], Sourced]) -> Sourced:
    """
    Run steps in order and return the first non-None result.

    A step that raises is logged and skipped. `final` must not fail; it is the
    catalog answer that makes the chain total.
    """
    for step in steps:
        name = getattr(step, "__name__", repr(step))
        try:
            result = await step()
        except Exception as e:
            logger.warning("[%s] %s failed: %s: %s", label, name, type(e).__name__, e)
            continue
        if result is not None:
            return result
        logger.info("[%s] %s produced no usable payload", label, name)
    return final()
