"""Exception hierarchy for llmchat.

Only programmer-invariant violations are modelled here. Transport errors
never surface as exceptions past the stream driver; they become
``Failed`` events instead.
"""


class ChatError(Exception):
    """Base class for llmchat errors."""


class ConversationStateError(ChatError):
    """A store operation was called in the wrong state."""

    def __init__(self, message: str):
        super().__init__(f"Invalid conversation state: {message}")


class StreamBusyError(ChatError):
    """A request was submitted while another stream is still open."""

    def __init__(self) -> None:
        super().__init__("A streaming response is already in flight")


class StreamClosedError(ChatError):
    """A pull was attempted on a stream that already terminated."""

    def __init__(self, handle_id: int):
        super().__init__(f"Stream {handle_id} is closed")
        self.handle_id = handle_id
