"""
llmchat: A terminal chat client that streams model replies as they arrive.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .conversation import ConversationSnapshot, ConversationStore, Message, Role
from .errors import ChatError, ConversationStateError, StreamBusyError, StreamClosedError
from .stream import StreamDriver, StreamHandle

__all__ = [
    "ChatError",
    "ConversationSnapshot",
    "ConversationStateError",
    "ConversationStore",
    "Message",
    "Role",
    "StreamBusyError",
    "StreamClosedError",
    "StreamDriver",
    "StreamHandle",
]
