"""Textual application hosting the chat session.

Turns Textual input, resize and mouse events into session events and
carries out the effects the session returns. Each stream pull runs as a
background worker whose result comes back as a message.
"""

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Input, Static

from ..events import (
    Event,
    Failed,
    KeyPress,
    MouseScroll,
    Quit,
    Resize,
    StreamEvent,
    Submit,
)
from ..llm import LLMProvider
from ..stream import StreamDriver
from .config import (
    APP_TITLE,
    CHROME_HEIGHT,
    DEBUG_PANEL_HEIGHT,
    INPUT_CHAR_LIMIT,
    INPUT_PLACEHOLDER,
    LogLevel,
)
from .session import SCROLL_KEYS, ChatSession, Effect
from .styles import APP_CSS
from .widgets import ConversationView, DebugPanel, copy_text


class StreamUpdate(Message):
    """Posted by the pull worker with the next stream event."""

    def __init__(self, event: StreamEvent) -> None:
        super().__init__()
        self.event = event


class ChatApp(App):
    """Textual TUI for streaming chat."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        *(
            Binding(key, f"scroll_conversation('{key}')", show=False, priority=True)
            for key in SCROLL_KEYS
        ),
    ]

    def __init__(
        self,
        llm: LLMProvider,
        model: str | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._panel_level = log_level
        self._sized = False
        self._stream_driver = StreamDriver(llm, model=model, debug_callback=self._trace)
        self.session = ChatSession(self._stream_driver, debug_callback=self._trace)
        self._trace_panel: DebugPanel | None = None

    def compose(self) -> ComposeResult:
        yield Static(APP_TITLE, id="title")
        yield Static(id="top-spacer")
        yield ConversationView(id="conversation")
        yield Static(id="bottom-spacer")
        with Horizontal(id="prompt-row"):
            yield Input(
                placeholder=INPUT_PLACEHOLDER,
                max_length=INPUT_CHAR_LIMIT,
                id="prompt",
            )
        yield Static(id="status")
        self._trace_panel = DebugPanel(id="debug-panel")
        yield self._trace_panel

    def on_mount(self) -> None:
        """Size the session to the terminal and focus the prompt."""
        if self._panel_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._panel_level)
            log_panel.show()
            self.session.set_chrome_height(CHROME_HEIGHT + DEBUG_PANEL_HEIGHT)
            self._trace("info", "TUI", f"Log level: {self._panel_level.upper()}")

        self._trace("info", "TUI", f"Model: {self._stream_driver.model}")
        self._sized = True
        self._feed(Resize(self.size.width, self.size.height))
        self.query_one("#prompt", Input).focus()

    def _trace(self, level: str, component: str, message: str) -> None:
        """Route component log messages to the log panel."""
        if self._trace_panel is not None:
            self._trace_panel.add_entry(component, message, LogLevel.from_string(level))

    def _feed(self, event: Event) -> Effect:
        """Feed one event to the session, then redraw and apply the effect."""
        effect = self.session.dispatch(event)
        self._redraw()
        if effect == Effect.PULL:
            self._pull_next()
        elif effect == Effect.FOCUS_INPUT:
            prompt = self.query_one("#prompt", Input)
            prompt.disabled = False
            prompt.focus()
        elif effect == Effect.QUIT:
            self.exit()
        return effect

    def _redraw(self) -> None:
        session = self.session
        self.screen.set_class(not session.store.history, "-empty")
        conversation = self.query_one("#conversation", ConversationView)
        conversation.display_frame(session.viewport.view())

        prompt = self.query_one("#prompt", Input)
        prompt.styles.width = session.input_width
        if session.streaming:
            prompt.disabled = True

        status = self.query_one("#status", Static)
        status.update(session.status)
        status.set_class(session.streaming, "-streaming")

    @work(exclusive=True, group="stream")
    async def _pull_next(self) -> None:
        """Pull one stream event in the background and hand it to the loop."""
        try:
            event = await self.session.pull()
        except Exception as e:
            # pull only raises on misuse; still close the request visibly
            self._trace("error", "TUI", f"Pull failed: {e!r}")
            event = Failed(e)
        self.post_message(StreamUpdate(event))

    def on_stream_update(self, message: StreamUpdate) -> None:
        self._feed(message.event)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Send the prompt text; the box is cleared only if a request started."""
        if self._feed(Submit(event.value)) == Effect.PULL:
            event.input.value = ""

    def on_resize(self, event: events.Resize) -> None:
        if not self._sized:
            return
        self._feed(Resize(event.size.width, event.size.height))

    def on_conversation_view_scrolled(self, message: ConversationView.Scrolled) -> None:
        self._feed(MouseScroll(message.direction))

    def action_scroll_conversation(self, key: str) -> None:
        self._feed(KeyPress(key))

    async def action_quit(self) -> None:
        """Quit immediately, abandoning any in-flight stream."""
        self._feed(Quit())

    def action_toggle_debug(self) -> None:
        """Show or hide the log panel, resizing the conversation to fit."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        extra = DEBUG_PANEL_HEIGHT if is_visible else 0
        self.session.set_chrome_height(CHROME_HEIGHT + extra)
        self._redraw()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy the newest assistant reply."""
        response = self.session.store.last_reply()
        if response:
            copy_text(self.screen, response, "Response")
        else:
            self.notify("No response to copy", severity="warning")


async def run_chat_tui(
    llm: LLMProvider,
    model: str | None = None,
    log_level: str | None = None,
) -> int:
    """Run the chat TUI until the user quits.

    Args:
        llm: LLM provider instance
        model: Model override (None uses the provider's default)
        log_level: Log level for panel (debug/info/warning/error), None to hide

    Returns:
        The app's exit code
    """
    app = ChatApp(llm=llm, model=model, log_level=log_level)
    await app.run_async()
    return app.return_code or 0
