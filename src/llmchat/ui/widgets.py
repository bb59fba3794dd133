"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Conversation frame display and mouse wheel capture
- Log rendering, level filtering and clipboard copy
"""

from datetime import datetime

from rich.text import Text
from textual.events import Click, MouseScrollDown, MouseScrollUp
from textual.message import Message
from textual.widget import Widget
from textual.widgets import RichLog

from ..events import ScrollDirection
from .config import LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel


def copy_text(widget: Widget, text: str, label: str) -> None:
    """Copy text to the system clipboard, falling back to OSC 52."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(f"{label} copied", timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{label} copied (terminal)", timeout=2)


class ConversationView(Widget):
    """Displays the visible slice of the rendered conversation.

    Scrolling is owned by the chat session; this widget only shows the
    frame it is given and reports mouse wheel movement.
    """

    DEFAULT_CSS = """
    ConversationView {
        height: 1fr;
    }
    """

    class Scrolled(Message):
        """Posted when the mouse wheel moves over the conversation."""

        def __init__(self, direction: ScrollDirection) -> None:
            super().__init__()
            self.direction = direction

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._chat_frame = Text("")

    @property
    def frame(self) -> Text:
        return self._chat_frame

    def display_frame(self, frame: Text) -> None:
        """Replace the displayed frame."""
        self._chat_frame = frame
        self.refresh()

    def render(self) -> Text:
        return self._chat_frame

    def on_mouse_scroll_up(self, event: MouseScrollUp) -> None:
        event.stop()
        self.post_message(self.Scrolled(ScrollDirection.UP))

    def on_mouse_scroll_down(self, event: MouseScrollDown) -> None:
        event.stop()
        self.post_message(self.Scrolled(ScrollDirection.DOWN))


class DebugPanel(RichLog):
    """Timestamped trace of session and stream activity.

    Entries below the current ``LogLevel`` threshold are dropped. The panel
    starts hidden (see the app CSS); ``--log-level`` shows it at startup and
    Ctrl+D toggles it. Clicking copies every entry to the clipboard.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Session": "green",
        "Stream": "magenta",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level
        self._entries: list[str] = []

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._refresh_level_subtitle()

    @property
    def entries(self) -> list[str]:
        """Plain-text copies of every line written so far."""
        return list(self._entries)

    def _refresh_level_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def add_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Session, Stream)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_name = LogLevel.name(level)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")

        line = Text.assemble(
            (timestamp, "dim"),
            " ",
            (f"{level_name:<5}", level_color),
            " ",
            (f"[{component}]", comp_color),
            " ",
            message,
        )
        self._entries.append(line.plain)
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._refresh_level_subtitle()

    def hide(self) -> None:
        self.display = False
        self._refresh_level_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        if self.display:
            self.hide()
        else:
            self.show()
        return self.display

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = "\n".join(self._entries)
        if not text.strip():
            self.app.notify("Log is empty", timeout=2)
            return
        copy_text(self, text, "Log")
