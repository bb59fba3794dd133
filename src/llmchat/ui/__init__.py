"""Terminal UI module for llmchat.

Provides a Textual-based TUI for streaming chat.

Module structure (Parnas principle - each module hides a design decision):
- config.py: Constants and log levels
- layout.py: Message bubble layout (pure rendering)
- viewport.py: Scroll window arithmetic
- session.py: Event dispatch and state transitions
- widgets.py: Custom widgets (conversation view, log panel)
- styles.py: CSS styling (layout decisions)
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, StreamUpdate, run_chat_tui
from .config import LogLevel
from .layout import content_geometry, render_conversation
from .session import ChatSession, Effect
from .viewport import Viewport
from .widgets import ConversationView, DebugPanel

__all__ = [
    "ChatApp",
    "ChatSession",
    "ConversationView",
    "DebugPanel",
    "Effect",
    "LogLevel",
    "StreamUpdate",
    "Viewport",
    "content_geometry",
    "render_conversation",
    "run_chat_tui",
]
