"""Lifecycle of a single streaming completion request.

The driver never touches the conversation store. It turns the provider's
async iterator into discrete events, one per ``pull``:

    handle = driver.submit(store.history)
    event = await driver.pull(handle)   # Fragment | Complete | Failed

Every exception raised by the provider, whether opening the stream or
mid-response, is returned as ``Failed`` exactly once; the handle is then
closed. ``asyncio.CancelledError`` is not caught, so cancelling the pull
(e.g. on quit) abandons the stream.
"""

import contextlib
import itertools
from collections.abc import Callable, Iterable
from typing import Any

from ..errors import StreamBusyError, StreamClosedError
from ..events import Complete, Failed, Fragment, StreamEvent
from ..llm import ChatMessage, LLMProvider, StreamingResponse

DebugCallback = Callable[[str, str, str], None]

# Roles forwarded to the completion API; anything else is dropped
FORWARDED_ROLES = frozenset({"user", "assistant"})

_handle_ids = itertools.count(1)


def _role_name(role: Any) -> str:
    return getattr(role, "value", role)


def to_chat_messages(history: Iterable[Any]) -> list[ChatMessage]:
    """Translate conversation messages into provider-neutral pairs."""
    messages = []
    for msg in history:
        role = _role_name(msg.role)
        if role in FORWARDED_ROLES:
            messages.append(ChatMessage(role=role, content=msg.content))
    return messages


class StreamHandle:
    """One outstanding completion request.

    The network stream is opened lazily by the first pull.
    """

    def __init__(self, messages: list[ChatMessage]) -> None:
        self.id = next(_handle_ids)
        self.messages = messages
        self.response: StreamingResponse | None = None
        self.fragment_count = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        self._closed = True
        if self.response is not None:
            # The generator may already be finished or broken
            with contextlib.suppress(Exception):
                await self.response.aclose()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<StreamHandle {self.id} {state} fragments={self.fragment_count}>"


class StreamDriver:
    """Issues completion requests and pulls their fragments one at a time."""

    def __init__(
        self,
        llm: LLMProvider,
        model: str | None = None,
        debug_callback: DebugCallback | None = None,
    ) -> None:
        self._llm = llm
        self._model = model
        self._debug_callback = debug_callback
        self._active: StreamHandle | None = None

    @property
    def model(self) -> str:
        return self._model or self._llm.model

    @property
    def active(self) -> StreamHandle | None:
        """The open handle, if any."""
        if self._active is not None and self._active.closed:
            self._active = None
        return self._active

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "Stream", message)

    def release(self, handle: StreamHandle) -> None:
        """Forget a handle the caller has finished with.

        Handles that produced Complete or Failed are already closed; this
        also frees the driver when a terminal event came from elsewhere.
        """
        if self._active is handle:
            self._active = None

    def submit(self, history: Iterable[Any]) -> StreamHandle:
        """Start a request for the given conversation history.

        Raises:
            StreamBusyError: If a previous handle is still open
        """
        if self.active is not None:
            raise StreamBusyError()
        handle = StreamHandle(to_chat_messages(history))
        self._active = handle
        self._debug("info", f"Submitted stream {handle.id} ({len(handle.messages)} messages, model {self.model})")
        return handle

    async def pull(self, handle: StreamHandle) -> StreamEvent:
        """Wait for the next non-empty fragment or a terminal event.

        Raises:
            StreamClosedError: If the handle already produced Complete or Failed
        """
        if handle.closed:
            raise StreamClosedError(handle.id)

        try:
            if handle.response is None:
                self._debug("debug", f"Opening stream {handle.id}")
                handle.response = await self._llm.chat_completion_stream(
                    handle.messages, model=self._model
                )
            while True:
                try:
                    text = await handle.response.__anext__()
                except StopAsyncIteration:
                    await handle.close()
                    summary = f"Stream {handle.id} complete after {handle.fragment_count} fragments"
                    if handle.response.usage is not None:
                        summary += f", usage {handle.response.usage}"
                    self._debug("info", summary)
                    return Complete()
                if text:
                    handle.fragment_count += 1
                    return Fragment(text)
        except Exception as e:
            await handle.close()
            self._debug("error", f"Stream {handle.id} failed: {e!r}")
            return Failed(e)
