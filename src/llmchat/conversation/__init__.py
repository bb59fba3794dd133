"""Conversation store module.

Hides how the message log and the in-progress reply are kept:
- models.py: Immutable message and snapshot types
- store.py: The single-writer store mutated by the event loop
"""

from .models import ConversationSnapshot, Message, Role
from .store import ConversationStore

__all__ = ["ConversationSnapshot", "ConversationStore", "Message", "Role"]
