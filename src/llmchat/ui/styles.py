"""Textual CSS for the chat screen.

Layout, top to bottom: title, spacer, conversation, spacer, input box,
status line. Row counts here must add up to ``CHROME_HEIGHT`` in
config.py. While the conversation is empty the screen carries the
``-empty`` class, which hides the conversation and centers the input box
vertically.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Title
   ============================================ */
#title {
    width: 100%;
    height: 1;
    margin-bottom: 1;
    text-align: center;
    text-style: bold;
    color: $primary;
}

/* ============================================
   Conversation
   ============================================ */
#conversation {
    width: 100%;
    height: 1fr;
    margin-bottom: 1;
}

#top-spacer, #bottom-spacer {
    display: none;
    height: 1fr;
}

Screen.-empty {
    #conversation {
        display: none;
    }

    #top-spacer, #bottom-spacer {
        display: block;
    }
}

/* ============================================
   Input Box
   ============================================ */
#prompt-row {
    width: 100%;
    height: 3;
    align: center top;
}

#prompt {
    width: 80;
    border: round $primary 60%;
    background: $panel;

    &:focus {
        border: round $primary;
    }

    &:disabled {
        border: round $warning 60%;
        opacity: 70%;
    }
}

/* ============================================
   Status Line
   ============================================ */
#status {
    width: 100%;
    height: 1;
    text-align: center;
    color: $text-muted;

    &.-streaming {
        color: $warning;
    }
}

/* ============================================
   Log Panel (hidden until --log-level or Ctrl+D)
   ============================================ */
#debug-panel {
    display: none;
    height: 10;
    padding: 0 1;
    background: $surface;
    border: round $secondary;
    border-title-color: $secondary;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    scrollbar-gutter: stable;
}
"""
