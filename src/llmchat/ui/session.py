"""Chat session state machine.

Owns the conversation store, the stream driver's active handle, viewport
geometry and scroll state. Every input, resize and stream event goes
through ``ChatSession.dispatch``, which mutates state, re-renders and
returns the ``Effect`` the host application must carry out:

    Idle      --Submit(text)-->  Streaming   Effect.PULL
    Streaming --Fragment(t)-->   Streaming   Effect.PULL
    Streaming --Complete-->      Idle        Effect.FOCUS_INPUT
    Streaming --Failed(err)-->   Idle        Effect.FOCUS_INPUT
    any       --Quit-->          (exit)      Effect.QUIT

Resize and scroll events are accepted in every state and never touch the
store. Submitting while streaming is silently ignored.
"""

from enum import Enum

from ..conversation import ConversationStore
from ..events import (
    Complete,
    Event,
    Failed,
    Fragment,
    KeyPress,
    MouseScroll,
    Quit,
    Resize,
    ScrollDirection,
    StreamEvent,
    Submit,
)
from ..stream import DebugCallback, StreamDriver, StreamHandle
from .config import (
    CHROME_HEIGHT,
    FALLBACK_HEIGHT,
    FALLBACK_WIDTH,
    INPUT_MAX_WIDTH,
    INPUT_SIDE_GUTTER,
    STATUS_IDLE,
    STATUS_STREAMING,
)
from .layout import render_conversation
from .viewport import Viewport

SCROLL_KEYS = ("up", "down", "pageup", "pagedown", "home", "end")


class Effect(str, Enum):
    """Follow-up work the host must perform after a dispatch."""

    NONE = "none"
    PULL = "pull"
    FOCUS_INPUT = "focus_input"
    QUIT = "quit"


class ChatSession:
    """Single-threaded event loop core for the chat client."""

    def __init__(
        self,
        driver: StreamDriver,
        width: int = FALLBACK_WIDTH,
        height: int = FALLBACK_HEIGHT,
        debug_callback: DebugCallback | None = None,
    ) -> None:
        self.store = ConversationStore()
        self.viewport = Viewport()
        self._driver = driver
        self._handle: StreamHandle | None = None
        self._debug_callback = debug_callback
        self.width = 0
        self.height = 0
        self._chrome_height = CHROME_HEIGHT
        self._resize(width, height)

    @property
    def streaming(self) -> bool:
        return self.store.streaming

    @property
    def handle(self) -> StreamHandle | None:
        return self._handle

    @property
    def input_width(self) -> int:
        return max(1, min(self.width - INPUT_SIDE_GUTTER, INPUT_MAX_WIDTH))

    @property
    def status(self) -> str:
        return STATUS_STREAMING if self.streaming else STATUS_IDLE

    def set_chrome_height(self, rows: int) -> None:
        """Change the rows reserved for widgets around the conversation."""
        self._chrome_height = rows
        self._resize(self.width, self.height)

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "Session", message)

    def dispatch(self, event: Event) -> Effect:
        """Apply one event and return the follow-up effect."""
        match event:
            case Submit(text=text):
                return self._on_submit(text)
            case Fragment(text=text):
                return self._on_fragment(text)
            case Complete():
                return self._on_complete()
            case Failed(error=error):
                return self._on_failed(error)
            case Resize(width=width, height=height):
                self._resize(width, height)
                return Effect.NONE
            case MouseScroll(direction=direction):
                self._on_mouse_scroll(direction)
                return Effect.NONE
            case KeyPress(key=key):
                self._on_key(key)
                return Effect.NONE
            case Quit():
                self._debug("info", "Quit requested")
                return Effect.QUIT
        raise TypeError(f"Unknown event: {event!r}")

    async def pull(self) -> StreamEvent:
        """Pull the next event for the active stream.

        Only valid after a dispatch returned ``Effect.PULL``.
        """
        if self._handle is None:
            raise RuntimeError("No active stream to pull from")
        return await self._driver.pull(self._handle)

    def _on_submit(self, text: str) -> Effect:
        if self.streaming:
            self._debug("debug", "Submit ignored while streaming")
            return Effect.NONE
        if not text.strip():
            return Effect.NONE

        self.store.begin_request(text)
        self._handle = self._driver.submit(self.store.history)
        self._debug("info", f"Request started: '{text[:50]}'")
        self._refresh(follow=True)
        return Effect.PULL

    def _on_fragment(self, text: str) -> Effect:
        if not self.streaming:
            self._debug("warning", "Fragment received while idle, ignored")
            return Effect.NONE
        self.store.append_fragment(text)
        self._refresh(follow=True)
        return Effect.PULL

    def _on_complete(self) -> Effect:
        if not self.streaming:
            self._debug("warning", "Completion received while idle, ignored")
            return Effect.NONE
        message = self.store.complete()
        self._release_handle()
        if message is None:
            self._debug("warning", "Stream completed with an empty reply")
        else:
            self._debug("info", f"Reply complete ({len(message.content)} chars)")
        self._refresh(follow=True)
        return Effect.FOCUS_INPUT

    def _on_failed(self, error: BaseException) -> Effect:
        if not self.streaming:
            self._debug("warning", "Failure received while idle, ignored")
            return Effect.NONE
        self.store.fail(error)
        self._release_handle()
        self._debug("error", f"Request failed: {error}")
        self._refresh(follow=True)
        return Effect.FOCUS_INPUT

    def _release_handle(self) -> None:
        if self._handle is not None:
            self._driver.release(self._handle)
            self._handle = None

    def _on_mouse_scroll(self, direction: ScrollDirection) -> None:
        if direction == ScrollDirection.UP:
            self.viewport.wheel_up()
        else:
            self.viewport.wheel_down()

    def _on_key(self, key: str) -> None:
        if key == "up":
            self.viewport.line_up()
        elif key == "down":
            self.viewport.line_down()
        elif key == "pageup":
            self.viewport.page_up()
        elif key == "pagedown":
            self.viewport.page_down()
        elif key == "home":
            self.viewport.goto_top()
        elif key == "end":
            self.viewport.goto_bottom()

    def _resize(self, width: int, height: int) -> None:
        self.width = width if width > 0 else FALLBACK_WIDTH
        self.height = height if height > 0 else FALLBACK_HEIGHT
        following = self.viewport.at_bottom()
        self.viewport.set_size(self.width, self.height - self._chrome_height)
        self._refresh(follow=following)

    def _refresh(self, follow: bool) -> None:
        """Re-render the conversation into the viewport.

        State changes always follow the newest line; resizes keep the
        reader's position unless they were already at the bottom.
        """
        self.viewport.set_content(render_conversation(self.store.snapshot(), self.width))
        if follow:
            self.viewport.goto_bottom()
