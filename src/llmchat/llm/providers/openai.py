from collections.abc import AsyncIterator, Callable
from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import ChatMessage, StreamingResponse

DEFAULT_MODEL = "gpt-4o-mini"


def _usage_dict(usage: Any) -> dict[str, Any]:
    return {
        "prompt_tokens": usage.prompt_tokens,
        "completion_tokens": usage.completion_tokens,
        "total_tokens": usage.total_tokens,
    }


class OpenAIProvider(LLMProvider):
    """Chat provider for the OpenAI Chat Completions API.

    Hidden design decisions:
    - Client construction and authentication
    - Request shape, including the usage-reporting stream option
    - Pulling the text delta out of each streamed chunk

    Any OpenAI-compatible endpoint works through ``base_url``.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize the provider.

        Args:
            api_key: API key for the endpoint
            model: Model used when a request does not name one
            base_url: Alternative OpenAI-compatible endpoint
            organization: Optional organization ID
            **client_kwargs: Passed through to AsyncOpenAI
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

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
        """Prepare a streaming completion.

        Nothing is sent until the response is first iterated, so connection
        and API errors come out of the iterator.
        """
        request: dict[str, Any] = {
            "model": model or self._model,
            "messages": [msg.to_api() for msg in messages],
            "temperature": temperature,
            "stream": True,
            "stream_options": {"include_usage": True},
            **kwargs,
        }
        if max_tokens is not None:
            request["max_tokens"] = max_tokens

        response = StreamingResponse(
            self._deltas(request, on_usage=lambda usage: response.set_usage(usage))
        )
        return response

    async def _deltas(
        self,
        request: dict[str, Any],
        on_usage: Callable[[dict[str, Any]], None],
    ) -> AsyncIterator[str]:
        stream = await self._client.chat.completions.create(**request)
        async for chunk in stream:
            # The usage chunk comes last and carries no choices
            if chunk.usage is not None:
                on_usage(_usage_dict(chunk.usage))
            if chunk.choices:
                yield chunk.choices[0].delta.content or ""

    async def close(self) -> None:
        await self._client.close()
