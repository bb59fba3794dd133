"""In-memory conversation store.

Session-only: the log lives for the process lifetime and is never
persisted. The event loop is the only writer.
"""

from ..errors import ConversationStateError
from .models import ConversationSnapshot, Message, Role


class ConversationStore:
    """Ordered message log plus the assistant reply being streamed.

    ``pending`` and ``streaming`` move together: ``begin_request`` opens a
    reply, ``append_fragment`` grows it, and exactly one of ``complete`` or
    ``fail`` closes it.
    """

    def __init__(self) -> None:
        self._history: list[Message] = []
        self._pending: list[str] = []
        self._streaming = False

    @property
    def history(self) -> tuple[Message, ...]:
        return tuple(self._history)

    @property
    def pending(self) -> str:
        return "".join(self._pending)

    @property
    def streaming(self) -> bool:
        return self._streaming

    def __len__(self) -> int:
        return len(self._history)

    def snapshot(self) -> ConversationSnapshot:
        """Return an immutable copy of the current state."""
        return ConversationSnapshot(
            history=self.history,
            pending=self.pending,
            streaming=self._streaming,
        )

    def begin_request(self, text: str) -> Message:
        """Record the user's message and open a new pending reply.

        Raises:
            ConversationStateError: If a reply is already streaming or the
                text is empty
        """
        if self._streaming:
            raise ConversationStateError("request submitted while streaming")
        if not text:
            raise ConversationStateError("empty message")
        message = Message.user(text)
        self._history.append(message)
        self._pending.clear()
        self._streaming = True
        return message

    def append_fragment(self, text: str) -> None:
        """Grow the pending reply."""
        if not self._streaming:
            raise ConversationStateError("fragment received while idle")
        self._pending.append(text)

    def complete(self) -> Message | None:
        """Finalize the pending reply.

        Returns:
            The new assistant message, or None when the reply was empty
        """
        if not self._streaming:
            raise ConversationStateError("completion received while idle")
        message = None
        pending = self.pending
        if pending:
            message = Message.assistant(pending)
            self._history.append(message)
        self._pending.clear()
        self._streaming = False
        return message

    def fail(self, error: BaseException | str) -> Message:
        """Close the pending reply with an error message.

        Any partial reply is discarded and replaced by ``Error: <error>``.
        """
        if not self._streaming:
            raise ConversationStateError("failure received while idle")
        message = Message.assistant(f"Error: {error}")
        self._history.append(message)
        self._pending.clear()
        self._streaming = False
        return message

    def last_reply(self) -> str | None:
        """Content of the most recent assistant message, if any."""
        for message in reversed(self._history):
            if message.role == Role.ASSISTANT:
                return message.content
        return None
