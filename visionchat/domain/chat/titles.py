"""
Chat title rules.

`simple_title` derives a title from the opening user message. New chats
carry a placeholder title starting with "New" until the first exchange
replaces it.
"""

import re

DEFAULT_TITLE = "New Conversation"
PLACEHOLDER_PREFIX = "New"
MAX_SIMPLE_TITLE_LENGTH = 50
MAX_GENERATED_TITLE_LENGTH = 60
AUTO_TITLE_MAX_MESSAGES = 2

_WHITESPACE = re.compile(r"\s+")


def simple_title(first_message: str) -> str:
    """Build a title from a message without calling the model.

    Long messages are cut to 47 characters plus an ellipsis before
    whitespace is collapsed. Very short texts and bare greetings fall
    back to DEFAULT_TITLE.
    """
    title = first_message.strip()
    if len(title) > MAX_SIMPLE_TITLE_LENGTH:
        title = title[: MAX_SIMPLE_TITLE_LENGTH - 3] + "..."
    title = _WHITESPACE.sub(" ", title)

    if len(title) < 3 or ("hello" in title.lower() and len(title) < 10):
        return DEFAULT_TITLE
    return title


def should_auto_title(title: str, stored_message_count: int) -> bool:
    """Whether the first exchange may replace the chat's placeholder title."""
    return (
        stored_message_count <= AUTO_TITLE_MAX_MESSAGES
        and title.startswith(PLACEHOLDER_PREFIX)
    )


def accept_generated_title(candidate: str | None) -> str | None:
    """Return a model-generated title if usable, else None."""
    if not candidate:
        return None
    candidate = candidate.strip()
    if 0 < len(candidate) <= MAX_GENERATED_TITLE_LENGTH:
        return candidate
    return None
