"""Data models for the conversation store.

These models define the structure of exchanged messages and of the
read-only snapshot handed to the renderer.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Sender of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single exchanged message. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who sent the message")
    content: str = Field(description="Message text")

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)


class ConversationSnapshot(BaseModel):
    """Point-in-time view of the store consumed by the layout engine."""

    model_config = ConfigDict(frozen=True)

    history: tuple[Message, ...] = Field(default=())
    pending: str = Field(default="", description="In-progress assistant reply")
    streaming: bool = Field(default=False)
