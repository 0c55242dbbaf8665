"""
Tests for chat domain rules: titles and stream events.
"""

from visionchat.domain.chat.entities import StreamEvent, StreamEventType
from visionchat.domain.chat.titles import (
    DEFAULT_TITLE,
    accept_generated_title,
    should_auto_title,
    simple_title,
)


class TestSimpleTitle:
    """Tests for the rule-based title."""

    def test_short_message_kept(self) -> None:
        assert simple_title("  Explain Python decorators ") == "Explain Python decorators"

    def test_long_message_truncated(self) -> None:
        """Messages over 50 characters are cut to 47 plus an ellipsis."""
        title = simple_title("a" * 80)
        assert title == "a" * 47 + "..."
        assert len(title) == 50

    def test_whitespace_collapsed(self) -> None:
        assert simple_title("What   is\n\nRSI?") == "What is RSI?"

    def test_tiny_message_falls_back(self) -> None:
        assert simple_title("hi") == DEFAULT_TITLE

    def test_short_greeting_falls_back(self) -> None:
        assert simple_title("Hello!") == DEFAULT_TITLE

    def test_long_message_with_greeting_kept(self) -> None:
        """Only short greetings are discarded."""
        assert simple_title("Hello, how do I read a candlestick?") == (
            "Hello, how do I read a candlestick?"
        )


class TestAutoTitleRules:
    """Tests for when a chat title may be replaced automatically."""

    def test_placeholder_on_fresh_chat(self) -> None:
        assert should_auto_title("New Conversation", 0)
        assert should_auto_title("New Chat", 2)

    def test_custom_title_is_kept(self) -> None:
        assert not should_auto_title("Bitcoin analysis", 0)

    def test_established_chat_is_kept(self) -> None:
        assert not should_auto_title("New Conversation", 3)

    def test_accept_generated_title(self) -> None:
        assert accept_generated_title("  CSS Div Centering \n") == "CSS Div Centering"
        assert accept_generated_title("") is None
        assert accept_generated_title(None) is None
        assert accept_generated_title("   ") is None
        assert accept_generated_title("x" * 61) is None


class TestStreamEvent:
    """Tests for the client-facing event payloads."""

    def test_content_payload(self) -> None:
        event = StreamEvent(type=StreamEventType.CONTENT, content="Hi")
        assert event.to_payload() == {"type": "content", "content": "Hi"}

    def test_done_payload(self) -> None:
        event = StreamEvent(type=StreamEventType.DONE, finish_reason="stop")
        assert event.to_payload() == {"type": "done", "finish_reason": "stop"}

    def test_error_payload(self) -> None:
        event = StreamEvent(type=StreamEventType.ERROR, error="boom")
        assert event.to_payload() == {"type": "error", "error": "boom"}
