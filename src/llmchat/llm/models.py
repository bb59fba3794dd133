"""Data types shared by all providers."""

from collections.abc import AsyncIterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One role/content pair as sent to a completion API."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="'user' or 'assistant'")
    content: str = Field(description="Message text")

    def to_api(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class StreamingResponse:
    """Async iterator over the text deltas of one completion.

    Token usage, when the provider reports it, arrives with the last chunk
    and is exposed through ``usage`` once iteration has finished:

        stream = await provider.chat_completion_stream(messages)
        async for delta in stream:
            ...
        stream.usage  # {"prompt_tokens": ..., "completion_tokens": ..., ...}
    """

    def __init__(self, deltas: AsyncIterator[str]):
        self._deltas = deltas
        self._usage: dict[str, Any] | None = None

    @property
    def usage(self) -> dict[str, Any] | None:
        return self._usage

    def set_usage(self, usage: dict[str, Any]) -> None:
        self._usage = usage

    def __aiter__(self) -> "StreamingResponse":
        return self

    async def __anext__(self) -> str:
        return await self._deltas.__anext__()

    async def aclose(self) -> None:
        """Stop the underlying generator, releasing its HTTP response."""
        aclose = getattr(self._deltas, "aclose", None)
        if aclose is not None:
            await aclose()
