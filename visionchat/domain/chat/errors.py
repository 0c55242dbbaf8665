"""
Domain-specific errors for the chat bounded context.

All errors raised from the chat domain and its use cases are defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class ChatDomainError(Exception):
    """Base error for all chat domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ChatNotFoundError(ChatDomainError):
    """Raised when a chat does not exist or belongs to another account."""

    def __init__(self, chat_id: str) -> None:
        super().__init__("Chat not found")
        self.chat_id = chat_id


class InvalidChatTitleError(ChatDomainError):
    """Raised when a chat title is blank."""

    def __init__(self) -> None:
        super().__init__("Chat title is required")


class EmptyConversationError(ChatDomainError):
    """Raised when a reply is requested without any prompt messages."""

    def __init__(self) -> None:
        super().__init__("Messages array is required and cannot be empty")


class EmptyChatError(ChatDomainError):
    """Raised when a title is requested for a chat without messages."""

    def __init__(self) -> None:
        super().__init__("Cannot generate title for empty chat")


class ChatServiceNotConfiguredError(ChatDomainError):
    """Raised when no completion provider API key is configured."""

    def __init__(self) -> None:
        super().__init__("API key not configured")


class CompletionError(ChatDomainError):
    """Raised when the completion provider rejects or fails a request.

    Attributes:
        code: Provider error code, e.g. "insufficient_quota",
            "invalid_api_key" or "model_not_found", when one was given.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code
