"""Provider interface for streaming chat completions.

Hides which remote API produces the reply. The rest of the client only
needs two things from a provider: a default model name and an async
iterator of text deltas for a list of role/content messages.
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, StreamingResponse


class LLMProvider(ABC):
    """Base class for chat providers.

    Providers own their HTTP client and must be closed. They can be used
    as async context managers:

        async with provider:
            stream = await provider.chat_completion_stream(messages)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model used when a request does not name one."""

    @abstractmethod
    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Start a streaming chat completion.

        Args:
            messages: Ordered conversation, oldest first
            model: Model override for this request
            temperature: Sampling temperature
            max_tokens: Optional cap on generated tokens
            **kwargs: Extra request parameters for the provider

        Returns:
            StreamingResponse yielding one text delta per provider chunk.
            Deltas can be empty; callers skip them if they care.

        Raises:
            Exception: Provider errors, either from this call or from
                iterating the response
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the provider's network resources."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the provider on exit.

        httpx can raise "Event loop is closed" when the client is torn down
        during interpreter shutdown (https://github.com/encode/httpx/issues/914);
        that one error is ignored.
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
