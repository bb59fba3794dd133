"""Conversation layout engine.

Hides how messages become terminal lines. ``render_conversation`` is a
pure function of a store snapshot and the viewport width; calling it twice
with the same inputs yields equal ``Text`` objects.

Layout rules:
- The conversation column is at most ``MAX_CONTENT_WIDTH`` cells wide and
  centered in the viewport.
- Each message is a bubble (text plus one cell of padding per side). User
  bubbles hug the right edge of the column, assistant bubbles the left,
  each keeping ``BUBBLE_MARGIN`` cells from the edge.
- Every bubble line is padded to the full viewport width, and a blank line
  separates messages.
- While streaming, the pending reply is shown as an extra assistant bubble.
"""

from collections.abc import Iterable

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

from ..conversation import ConversationSnapshot, Message, Role
from .config import (
    ASSISTANT_BUBBLE_STYLE,
    BUBBLE_MARGIN,
    BUBBLE_PADDING,
    FALLBACK_WIDTH,
    MAX_CONTENT_WIDTH,
    STREAM_CURSOR,
    STREAM_PLACEHOLDER,
    USER_BUBBLE_STYLE,
)

# Only used by Text.wrap for left-justified word wrapping
_wrap_console = Console(width=MAX_CONTENT_WIDTH, color_system=None, force_terminal=False)


def content_geometry(width: int) -> tuple[int, int]:
    """Return (content width, left centering offset) for a viewport width."""
    if width <= 0:
        width = FALLBACK_WIDTH
    content_width = min(width, MAX_CONTENT_WIDTH)
    left_padding = (width - content_width) // 2
    return content_width, left_padding


def pending_text(pending: str) -> str:
    """Text shown in the streaming bubble."""
    if not pending:
        return STREAM_PLACEHOLDER
    return pending + STREAM_CURSOR


def _wrap(text: str, inner_width: int) -> list[Text]:
    if inner_width <= 0:
        return [Text("")]
    lines = Text(text).wrap(_wrap_console, inner_width, justify="left", overflow="fold")
    return list(lines) or [Text("")]


def render_bubble(text: str, role: Role, content_width: int) -> list[Text]:
    """Render one message as bubble lines positioned inside the content column.

    The bubble's inner width is the widest line of ``text`` in cells, capped
    so that bubble and margin fit the column. An empty text degenerates to a
    bubble made of padding only.
    """
    text = text.expandtabs(8)
    max_inner = max(1, content_width - 2 * BUBBLE_PADDING - BUBBLE_MARGIN)
    widest = max((cell_len(line) for line in text.split("\n")), default=0)
    inner_width = min(widest, max_inner)
    bubble_width = inner_width + 2 * BUBBLE_PADDING
    style = USER_BUBBLE_STYLE if role == Role.USER else ASSISTANT_BUBBLE_STYLE
    pad = " " * BUBBLE_PADDING

    rendered = []
    for body in _wrap(text, inner_width):
        body.truncate(inner_width, overflow="crop", pad=True)
        bubble = Text.assemble(pad, body, pad, style=style)
        if role == Role.USER:
            indent = max(0, content_width - bubble_width - BUBBLE_MARGIN)
            line = Text.assemble(" " * indent, bubble, " " * BUBBLE_MARGIN)
        else:
            line = Text.assemble(" " * BUBBLE_MARGIN, bubble)
        rendered.append(line)
    return rendered


def _place(lines: Iterable[Text], width: int, left_padding: int) -> list[Text]:
    """Shift column lines right and pad them to the full viewport width."""
    placed = []
    for line in lines:
        row = Text(" " * left_padding)
        row.append_text(line)
        row.truncate(width, overflow="crop", pad=True)
        placed.append(row)
    return placed


def render_message(message: Message, width: int) -> list[Text]:
    """Render a single message followed by its blank separator line."""
    if width <= 0:
        width = FALLBACK_WIDTH
    content_width, left_padding = content_geometry(width)
    lines = _place(render_bubble(message.content, message.role, content_width), width, left_padding)
    lines.append(Text(""))
    return lines


def render_conversation(snapshot: ConversationSnapshot, width: int) -> Text:
    """Render the whole conversation as one multi-line ``Text``."""
    if width <= 0:
        width = FALLBACK_WIDTH

    lines: list[Text] = []
    for message in snapshot.history:
        lines.extend(render_message(message, width))

    if snapshot.streaming:
        draft = Message.assistant(pending_text(snapshot.pending))
        lines.extend(render_message(draft, width))

    return Text("\n").join(lines)
