"""
LiteLLM Client Tests

LiteLLMClient is the only adapter that talks to a real provider. These tests
replace `acompletion` with a recorder so the request shape (system message
first, timeout, sampling params) and the empty-reply handling can be checked
without network access.

Run:
----
    pytest readcrew/tests/test_llm_client.py -v
"""

import asyncio
import json
from types import SimpleNamespace

import pytest

from conftest import book_dicts

from readcrew.services import SOURCE_FALLBACK, SOURCE_GENERATIVE, ConversationEngine, InMemorySessionStore
from readcrew.services import llm_client
from readcrew.services.conversation import CLARIFYING_QUESTION
from readcrew.services.llm_client import LiteLLMClient


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def fake_acompletion(monkeypatch):
    """Install a recording acompletion that answers with the given contents in order."""

    def _install(*contents):
        calls = []
        replies = list(contents)

        async def acompletion(**kwargs):
            calls.append(kwargs)
            reply = replies.pop(0) if len(replies) > 1 else replies[0]
            if isinstance(reply, Exception):
                raise reply
            return _completion(reply)

        monkeypatch.setattr(llm_client, "acompletion", acompletion)
        return calls

    return _install


class TestRequestShape:

    def test_system_message_first_and_params_forwarded(self, fake_acompletion):
        calls = fake_acompletion("Hello reader!")
        client = LiteLLMClient("groq", timeout=12.5)
        history = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "What do you like?"},
            {"role": "user", "content": "mysteries"},
        ]

        text = asyncio.run(client.complete("Be helpful.", history, temperature=0.3, max_tokens=256))

        assert text == "Hello reader!"
        (kwargs,) = calls
        assert kwargs["model"] == "groq/llama-3.3-70b-versatile"
        assert kwargs["messages"][0] == {"role": "system", "content": "Be helpful."}
        assert kwargs["messages"][1:] == history
        assert kwargs["timeout"] == 12.5
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 256

    def test_history_is_not_mutated(self, fake_acompletion):
        fake_acompletion("ok")
        history = [{"role": "user", "content": "hi"}]

        asyncio.run(LiteLLMClient("openai").complete("sys", history))

        assert history == [{"role": "user", "content": "hi"}]

    def test_model_override(self, fake_acompletion):
        calls = fake_acompletion("ok")
        asyncio.run(LiteLLMClient("groq", model="groq/llama-3.1-8b-instant").complete("sys", []))
        assert calls[0]["model"] == "groq/llama-3.1-8b-instant"


class TestEmptyCompletion:

    @pytest.mark.parametrize("content", [None, "", "   \n"])
    def test_empty_reply_raises(self, fake_acompletion, content):
        fake_acompletion(content)
        with pytest.raises(ValueError):
            asyncio.run(LiteLLMClient("groq").complete("sys", []))

    def test_empty_reply_ends_in_catalog_recommendations(self, fake_acompletion, catalog, clock):
        fake_acompletion("")
        engine = ConversationEngine(LiteLLMClient("groq"), catalog, InMemorySessionStore(clock=clock))

        result = asyncio.run(engine.recommend("cosy mysteries", page=2))

        assert result.source == SOURCE_FALLBACK
        assert result.value == catalog.page(2)

    def test_empty_reply_in_chat_takes_offline_path(self, fake_acompletion, catalog, clock):
        fake_acompletion("")
        engine = ConversationEngine(LiteLLMClient("groq"), catalog, InMemorySessionStore(clock=clock))

        first = asyncio.run(engine.handle_turn("s", "hello"))
        second = asyncio.run(engine.handle_turn("s", "thrillers"))

        assert first.reply == CLARIFYING_QUESTION
        assert second.source == SOURCE_FALLBACK
        assert second.recommendations == catalog.page(1)

    def test_transport_error_propagates_to_the_cascade(self, fake_acompletion, catalog, clock):
        fake_acompletion(TimeoutError("request timed out"), json.dumps(book_dicts("Later")))
        engine = ConversationEngine(LiteLLMClient("groq"), catalog, InMemorySessionStore(clock=clock))

        failed = asyncio.run(engine.similar_books("Dune"))
        recovered = asyncio.run(engine.similar_books("Dune"))

        assert failed.source == SOURCE_FALLBACK
        assert recovered.source == SOURCE_GENERATIVE
        assert recovered.value[0].title == "Later 1"
