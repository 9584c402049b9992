"""Tests for the OpenAI-backed text generator, with a stub client."""

import asyncio
from types import SimpleNamespace

import pytest

from cuisinons.llm.client import OpenAITextGenerator


class StubCompletions:
    def __init__(self, content="", error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _generator(completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAITextGenerator(model="test-model", client=client)


class TestGenerate:
    def test_sends_messages_and_sampling(self):
        completions = StubCompletions('{"title": "Soup"}')

        text = asyncio.run(
            _generator(completions).generate("rules", "content", max_tokens=1500, temperature=0.7)
        )

        assert text == '{"title": "Soup"}'
        assert completions.kwargs["model"] == "test-model"
        assert completions.kwargs["messages"] == [
            {"role": "system", "content": "rules"},
            {"role": "user", "content": "content"},
        ]
        assert completions.kwargs["max_tokens"] == 1500
        assert completions.kwargs["temperature"] == 0.7
        assert "timeout" not in completions.kwargs

    def test_timeout_passed_through(self):
        completions = StubCompletions("ok")
        asyncio.run(_generator(completions).generate("s", "u", max_tokens=10, temperature=0, timeout=12))
        assert completions.kwargs["timeout"] == 12

    def test_empty_content(self):
        completions = StubCompletions(None)
        assert asyncio.run(_generator(completions).generate("s", "u", max_tokens=10, temperature=0)) == ""

    def test_errors_propagate(self):
        completions = StubCompletions(error=RuntimeError("rate limited"))
        with pytest.raises(RuntimeError, match="rate limited"):
            asyncio.run(_generator(completions).generate("s", "u", max_tokens=10, temperature=0))
