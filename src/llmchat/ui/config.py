"""Constants for the chat UI."""


class LogLevel:
    """Log panel thresholds.

    An entry is shown when its level is at or above the panel's threshold.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, text: str) -> int:
        """Parse a --log-level value. Unknown names mean DEBUG."""
        return cls._from_string.get(text.lower(), cls.DEBUG)


APP_TITLE = "LLM Chat TUI"

# Terminal geometry fallbacks before the first resize notification
FALLBACK_WIDTH = 80
FALLBACK_HEIGHT = 24

# Rows used by everything except the conversation view:
# title, spacer, spacer, input box (3 with border), status
CHROME_HEIGHT = 7
DEBUG_PANEL_HEIGHT = 10  # Extra rows taken by the log panel when shown

# Message layout
MAX_CONTENT_WIDTH = 120  # Conversation column never grows wider than this
BUBBLE_PADDING = 1  # Cells of padding on each side of bubble text
BUBBLE_MARGIN = 2  # Gap between a bubble and its column edge
STREAM_CURSOR = "▋"
STREAM_PLACEHOLDER = "..."

# Bubble colors (ANSI palette indices)
USER_BUBBLE_STYLE = "color(15) on color(4)"
ASSISTANT_BUBBLE_STYLE = "color(15) on color(8)"

# Input box
INPUT_PLACEHOLDER = "Type your message here..."
INPUT_CHAR_LIMIT = 500
INPUT_MAX_WIDTH = 80
INPUT_SIDE_GUTTER = 4

# Scrolling
MOUSE_WHEEL_DELTA = 3  # Lines per wheel notch

# Status line
STATUS_IDLE = "Press Enter to send, Ctrl+C to quit • Use ↑/↓ or Page Up/Down to scroll with mouse wheel"
STATUS_STREAMING = "Streaming response... Please wait"

# Log panel
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages
