"""Scrollable window over rendered conversation lines.

Hides scroll arithmetic: the offset is always clamped to
``[0, max(0, line_count - height)]``.
"""

from rich.text import Text

from .config import MOUSE_WHEEL_DELTA


class Viewport:
    """A fixed-height window over a list of lines."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = width
        self.height = height
        self.y_offset = 0
        self._lines: list[Text] = []

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def max_offset(self) -> int:
        return max(0, len(self._lines) - self.height)

    def set_content(self, content: Text) -> None:
        """Replace the content, keeping the offset within bounds."""
        self._lines = list(content.split("\n", allow_blank=True)) if content.plain else []
        self._clamp()

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = max(0, height)
        self._clamp()

    def _clamp(self) -> None:
        self.y_offset = min(max(0, self.y_offset), self.max_offset)

    def at_top(self) -> bool:
        return self.y_offset <= 0

    def at_bottom(self) -> bool:
        return self.y_offset >= self.max_offset

    def scroll_by(self, delta: int) -> None:
        self.y_offset += delta
        self._clamp()

    def line_up(self, n: int = 1) -> None:
        self.scroll_by(-n)

    def line_down(self, n: int = 1) -> None:
        self.scroll_by(n)

    def page_up(self) -> None:
        self.scroll_by(-max(1, self.height))

    def page_down(self) -> None:
        self.scroll_by(max(1, self.height))

    def wheel_up(self) -> None:
        self.line_up(MOUSE_WHEEL_DELTA)

    def wheel_down(self) -> None:
        self.line_down(MOUSE_WHEEL_DELTA)

    def goto_top(self) -> None:
        self.y_offset = 0

    def goto_bottom(self) -> None:
        self.y_offset = self.max_offset

    def visible_lines(self) -> list[Text]:
        return self._lines[self.y_offset:self.y_offset + self.height]

    def view(self) -> Text:
        """Return the visible lines, padded with blank lines to the full height."""
        lines = self.visible_lines()
        lines.extend(Text("") for _ in range(self.height - len(lines)))
        return Text("\n").join(lines)
