"""Tests for the chat session state machine."""
import pytest

from llmchat.conversation import Message
from llmchat.events import (
    Complete,
    Failed,
    Fragment,
    KeyPress,
    MouseScroll,
    Quit,
    Resize,
    ScrollDirection,
    Submit,
)
from llmchat.ui import ChatSession, Effect
from llmchat.ui.config import CHROME_HEIGHT, STATUS_IDLE, STATUS_STREAMING, STREAM_CURSOR


def fill_history(session: ChatSession, count: int) -> None:
    """Run ``count`` exchanges through the session without a provider."""
    for i in range(count):
        session.dispatch(Submit(f"question {i}"))
        session.dispatch(Fragment(f"answer {i}"))
        session.dispatch(Complete())


class TestExchanges:
    """End-to-end request/response flows through the session."""

    @pytest.mark.asyncio
    async def test_successful_reply(self, session, provider, run_exchange):
        """Test that fragments become one assistant message."""
        provider.script = ["Hi", " there"]

        events = await run_exchange(session, "Hello")

        assert events == [Fragment("Hi"), Fragment(" there"), Complete()]
        assert session.store.history == (Message.user("Hello"), Message.assistant("Hi there"))
        assert not session.streaming
        assert session.handle is None

    @pytest.mark.asyncio
    async def test_failed_reply(self, session, provider, run_exchange):
        """Test that a stream error replaces the partial reply."""
        provider.script = ["Working", TimeoutError("timeout")]

        events = await run_exchange(session, "Test")

        assert events[0] == Fragment("Working")
        assert isinstance(events[1], Failed)
        assert session.store.history == (Message.user("Test"), Message.assistant("Error: timeout"))
        assert session.store.pending == ""
        assert not session.streaming

    @pytest.mark.asyncio
    async def test_empty_reply(self, session, provider, run_exchange):
        """Test that an empty stream appends no assistant message."""
        events = await run_exchange(session, "Hello")

        assert events == [Complete()]
        assert session.store.history == (Message.user("Hello"),)
        assert not session.streaming

    @pytest.mark.asyncio
    async def test_open_error(self, session, provider, run_exchange):
        """Test that a request that cannot start fails like a stream error."""
        provider.open_error = ConnectionError("refused")

        await run_exchange(session, "Hello")

        assert session.store.history[-1] == Message.assistant("Error: refused")
        assert not session.streaming

    @pytest.mark.asyncio
    async def test_history_is_forwarded(self, session, provider, run_exchange):
        """Test that every request carries the whole conversation."""
        provider.script = ["one"]
        await run_exchange(session, "first")
        provider.script = ["two"]
        await run_exchange(session, "second")

        contents = [message.content for message in provider.calls[-1]]
        assert contents == ["first", "one", "second"]

    @pytest.mark.asyncio
    async def test_pull_without_stream_raises(self, session):
        """Test that pulling while idle is a programming error."""
        with pytest.raises(RuntimeError):
            await session.pull()


class TestTransitions:
    """Tests for individual event dispatches."""

    def test_submit_starts_streaming(self, session, provider):
        """Test the idle to streaming transition."""
        effect = session.dispatch(Submit("Hello"))

        assert effect == Effect.PULL
        assert session.streaming
        assert session.handle is not None
        assert session.status == STATUS_STREAMING

    def test_submit_keeps_text_verbatim(self, session):
        """Test that leading indentation and trailing whitespace are stored."""
        session.dispatch(Submit("    indented code\n"))

        assert session.store.history == (Message.user("    indented code\n"),)

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_submit_is_ignored(self, session, text):
        """Test that blank input does not start a request."""
        assert session.dispatch(Submit(text)) == Effect.NONE
        assert not session.streaming
        assert session.store.history == ()

    def test_submit_while_streaming_is_ignored(self, session, provider):
        """Test that only one request can be in flight."""
        session.dispatch(Submit("Hello"))
        session.dispatch(Fragment("Hi"))
        handle = session.handle

        effect = session.dispatch(Submit("Again"))

        assert effect == Effect.NONE
        assert session.handle is handle
        assert session.store.history == (Message.user("Hello"),)
        assert len(provider.calls) == 0
        assert session.store.pending == "Hi"
        assert session.streaming

    def test_fragment_continues_pulling(self, session):
        """Test that each fragment asks for the next one."""
        session.dispatch(Submit("Hello"))

        assert session.dispatch(Fragment("Hi")) == Effect.PULL
        assert session.store.pending == "Hi"

    def test_complete_focuses_input(self, session):
        """Test the streaming to idle transition."""
        session.dispatch(Submit("Hello"))
        session.dispatch(Fragment("Hi"))

        assert session.dispatch(Complete()) == Effect.FOCUS_INPUT
        assert session.status == STATUS_IDLE
        assert session.store.history[-1] == Message.assistant("Hi")

    def test_failed_focuses_input(self, session):
        """Test that errors also return to idle."""
        session.dispatch(Submit("Hello"))

        assert session.dispatch(Failed(ValueError("boom"))) == Effect.FOCUS_INPUT
        assert session.store.history[-1] == Message.assistant("Error: boom")

    @pytest.mark.parametrize("event", [Fragment("late"), Complete(), Failed(ValueError("late"))])
    def test_stream_events_while_idle_are_ignored(self, session, event):
        """Test that stale stream events do not touch the store."""
        assert session.dispatch(event) == Effect.NONE
        assert session.store.history == ()
        assert session.store.pending == ""

    def test_quit(self, session):
        """Test that quitting is allowed in any state."""
        assert session.dispatch(Quit()) == Effect.QUIT

        session.dispatch(Submit("Hello"))
        assert session.dispatch(Quit()) == Effect.QUIT

    def test_unknown_event_raises(self, session):
        """Test that only known events are accepted."""
        with pytest.raises(TypeError):
            session.dispatch("not an event")


class TestRendering:
    """Tests for what the session puts in the viewport."""

    def test_streaming_draft_is_visible(self, session):
        """Test that pending text is rendered with the cursor."""
        session.dispatch(Submit("Hello"))
        session.dispatch(Fragment("Hi"))

        assert f"Hi{STREAM_CURSOR}" in session.viewport.view().plain

    def test_placeholder_before_first_fragment(self, session):
        """Test that an empty draft shows the waiting placeholder."""
        session.dispatch(Submit("Hello"))

        assert "..." in session.viewport.view().plain

    def test_viewport_height_excludes_chrome(self, session):
        """Test the conversation area size."""
        assert session.viewport.height == 24 - CHROME_HEIGHT

    def test_chrome_height_change(self, session):
        """Test that extra chrome shrinks the conversation area."""
        session.set_chrome_height(CHROME_HEIGHT + 10)

        assert session.viewport.height == 24 - CHROME_HEIGHT - 10

    def test_input_width(self, session):
        """Test the input box width at different terminal widths."""
        assert session.input_width == 76

        session.dispatch(Resize(200, 50))
        assert session.input_width == 80

        session.dispatch(Resize(3, 50))
        assert session.input_width == 1

    def test_debug_callback_receives_session_messages(self, driver):
        """Test that session activity is reported to the log callback."""
        messages = []
        session = ChatSession(driver, debug_callback=lambda *args: messages.append(args))

        session.dispatch(Submit("Hello"))

        assert ("info", "Session", "Request started: 'Hello'") in messages


class TestResize:
    """Tests for terminal size changes."""

    def test_resize_during_stream_keeps_state(self, session):
        """Test that resizing only changes layout."""
        session.dispatch(Submit("Hello"))
        session.dispatch(Fragment("Hi"))
        before = session.store.snapshot()

        assert session.dispatch(Resize(120, 40)) == Effect.NONE

        assert session.store.snapshot() == before
        assert session.width == 120
        assert session.viewport.height == 40 - CHROME_HEIGHT

    def test_resize_changes_line_width(self, session):
        """Test that rendered lines follow the new width."""
        session.dispatch(Submit("Hello"))

        session.dispatch(Resize(100, 24))

        assert len(session.viewport.visible_lines()[0].plain) == 100

    @pytest.mark.parametrize("width,height", [(0, 0), (-1, -1)])
    def test_unknown_size_uses_fallback(self, session, width, height):
        """Test that unusable sizes fall back to a standard terminal."""
        session.dispatch(Resize(width, height))

        assert (session.width, session.height) == (80, 24)

    def test_resize_keeps_scroll_position_when_reading(self, session):
        """Test that a resize does not yank a reader back to the bottom."""
        fill_history(session, 10)
        session.dispatch(KeyPress("home"))

        session.dispatch(Resize(90, 24))

        assert session.viewport.at_top()

    def test_resize_follows_when_at_bottom(self, session):
        """Test that a resize keeps the newest line visible."""
        fill_history(session, 10)

        session.dispatch(Resize(90, 30))

        assert session.viewport.at_bottom()


class TestScrolling:
    """Tests for keyboard and mouse scrolling."""

    def test_new_messages_follow_bottom(self, session):
        """Test that new content scrolls into view."""
        fill_history(session, 10)

        assert session.viewport.y_offset > 0
        assert session.viewport.at_bottom()

    def test_scroll_keys(self, session):
        """Test each navigation key."""
        fill_history(session, 10)
        viewport = session.viewport
        bottom = viewport.max_offset

        session.dispatch(KeyPress("up"))
        assert viewport.y_offset == bottom - 1

        session.dispatch(KeyPress("down"))
        assert viewport.y_offset == bottom

        session.dispatch(KeyPress("pageup"))
        assert viewport.y_offset == bottom - viewport.height

        session.dispatch(KeyPress("pagedown"))
        assert viewport.y_offset == bottom

        session.dispatch(KeyPress("home"))
        assert viewport.y_offset == 0

        session.dispatch(KeyPress("end"))
        assert viewport.y_offset == bottom

    def test_other_keys_do_nothing(self, session):
        """Test that unrelated keys leave the viewport alone."""
        fill_history(session, 10)
        offset = session.viewport.y_offset

        assert session.dispatch(KeyPress("x")) == Effect.NONE
        assert session.viewport.y_offset == offset

    def test_mouse_wheel(self, session):
        """Test that wheel notches scroll by several lines."""
        fill_history(session, 10)
        bottom = session.viewport.max_offset

        session.dispatch(MouseScroll(ScrollDirection.UP))
        assert session.viewport.y_offset == bottom - 3

        session.dispatch(MouseScroll(ScrollDirection.DOWN))
        assert session.viewport.y_offset == bottom

    def test_scrolling_does_not_touch_store(self, session):
        """Test that navigation is pure view state."""
        fill_history(session, 3)
        before = session.store.snapshot()

        session.dispatch(KeyPress("home"))
        session.dispatch(MouseScroll(ScrollDirection.DOWN))

        assert session.store.snapshot() == before

    def test_new_fragment_returns_to_bottom(self, session):
        """Test that streaming output pulls the view back down."""
        fill_history(session, 10)
        session.dispatch(Submit("more"))
        session.dispatch(KeyPress("home"))

        session.dispatch(Fragment("text"))

        assert session.viewport.at_bottom()
