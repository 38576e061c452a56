"""Shared fixtures: scripted generative clients and a controllable clock."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from readcrew.services import FallbackCatalog
from readcrew.services.extractor import REC_END, REC_START


class StubClient:
    """
    Scripted stand-in for the generative service.

    Replies are consumed in order; the last one repeats. An Exception instance
    in the script is raised instead of returned. Every call is recorded.
    """

    def __init__(self, *replies):
        self.replies = list(replies) or [""]
        self.calls = []

    async def complete(self, system_instruction, messages, temperature=0.7, max_tokens=1024):
        self.calls.append({
            "system": system_instruction,
            "messages": [dict(m) for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


class EchoClient(StubClient):
    """Answers every call with the system instruction it was given."""

    async def complete(self, system_instruction, messages, temperature=0.7, max_tokens=1024):
        await super().complete(system_instruction, messages, temperature, max_tokens)
        return system_instruction


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def book_dicts(prefix: str, count: int = 5) -> list:
    return [
        {"title": f"{prefix} {i}", "author": f"Author {i}", "genre": "Fiction", "rating": 4.2}
        for i in range(1, count + 1)
    ]


def rec_reply(intro: str = "Great taste! Here are some picks.", books=None) -> str:
    payload = json.dumps(books if books is not None else book_dicts("Model Pick"))
    return f"{intro}\n{REC_START}\n{payload}\n{REC_END}"


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def catalog():
    return FallbackCatalog()


@pytest.fixture
def stub_client():
    return StubClient


@pytest.fixture
def echo_client():
    return EchoClient()
