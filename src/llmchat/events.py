"""Events consumed by the chat session state machine.

The set is closed: terminal input (``Resize``, ``MouseScroll``,
``KeyPress``, ``Submit``, ``Quit``) and stream lifecycle (``Fragment``,
``Complete``, ``Failed``). ``ChatSession.dispatch`` matches on them.
"""

from dataclasses import dataclass
from enum import Enum


class ScrollDirection(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class MouseScroll:
    direction: ScrollDirection


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class Submit:
    text: str


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Fragment:
    """A non-empty piece of the assistant reply."""

    text: str


@dataclass(frozen=True)
class Complete:
    """The stream ended normally."""


@dataclass(frozen=True)
class Failed:
    """The stream ended with a transport or protocol error."""

    error: BaseException


StreamEvent = Fragment | Complete | Failed
Event = Resize | MouseScroll | KeyPress | Submit | Quit | Fragment | Complete | Failed

__all__ = [
    "Complete",
    "Event",
    "Failed",
    "Fragment",
    "KeyPress",
    "MouseScroll",
    "Quit",
    "Resize",
    "ScrollDirection",
    "StreamEvent",
    "Submit",
]
