"""Pytest configuration and shared fixtures."""
from collections.abc import AsyncIterator
from typing import Any

import pytest

from llmchat.events import Submit
from llmchat.llm import ChatMessage, LLMProvider, StreamingResponse
from llmchat.stream import StreamDriver
from llmchat.ui import ChatSession, Effect


class ScriptedProvider(LLMProvider):
    """LLM provider that replays a fixed script instead of calling an API.

    Script items are yielded in order as text deltas; an exception item is
    raised at that point of the stream. ``open_error`` is raised when the
    stream is requested. ``usage`` is reported on the response as a real
    provider would after its last chunk.
    """

    def __init__(
        self,
        script: list[Any] | None = None,
        open_error: BaseException | None = None,
        model: str = "fake-model",
        usage: dict[str, int] | None = None,
    ) -> None:
        self.script = list(script or [])
        self.open_error = open_error
        self.usage = usage
        self._model = model
        self.calls: list[list[ChatMessage]] = []
        self.requested_models: list[str | None] = []
        self.closed = False
        self.generators_closed = 0

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        self.calls.append(list(messages))
        self.requested_models.append(model)
        if self.open_error is not None:
            raise self.open_error
        response = StreamingResponse(self._generate(list(self.script)))
        if self.usage is not None:
            response.set_usage(self.usage)
        return response

    async def _generate(self, script: list[Any]) -> AsyncIterator[str]:
        try:
            for item in script:
                if isinstance(item, BaseException):
                    raise item
                yield item
        finally:
            self.generators_closed += 1

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def provider():
    """Return a scripted provider with an empty script."""
    return ScriptedProvider()


@pytest.fixture
def driver(provider):
    """Return a stream driver over the scripted provider."""
    return StreamDriver(provider)


@pytest.fixture
def session(driver):
    """Return a chat session on an 80x24 terminal."""
    return ChatSession(driver, width=80, height=24)


@pytest.fixture
def run_exchange():
    """Return a coroutine that submits text and pulls until the stream ends.

    Mirrors what the app does: dispatch, then pull and dispatch again for
    as long as the session asks for another pull.
    """
    async def _run(session: ChatSession, text: str) -> list[Any]:
        events: list[Any] = []
        effect = session.dispatch(Submit(text))
        while effect == Effect.PULL:
            event = await session.pull()
            events.append(event)
            effect = session.dispatch(event)
        return events

    return _run

