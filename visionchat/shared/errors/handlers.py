"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses carry an "error" message, plus fixed extra fields
for a few cases (e.g. requires_verification on unverified logins).
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from visionchat.domain.auth.errors import (
    AccountNotFoundError,
    AlreadyVerifiedError,
    AuthDomainError,
    AuthenticationRequiredError,
    EmailAlreadyRegisteredError,
    EmailDeliveryError,
    GoogleAuthError,
    InvalidCredentialsError,
    InvalidSessionError,
    InvalidTokenError,
    LoginNotVerifiedError,
    ResetNotVerifiedError,
    UserNotFoundError,
    WeakPasswordError,
)
from visionchat.domain.chat.errors import (
    ChatDomainError,
    ChatNotFoundError,
    ChatServiceNotConfiguredError,
    CompletionError,
    EmptyChatError,
    EmptyConversationError,
    InvalidChatTitleError,
)
from visionchat.domain.market.errors import (
    MarketDataUnavailableError,
    MarketDomainError,
    SymbolNotFoundError,
    UpstreamRateLimitedError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_403 = 403
HTTP_404 = 404
HTTP_409 = 409
HTTP_429 = 429
HTTP_500 = 500
HTTP_502 = 502

AUTH_STATUS: dict[type[AuthDomainError], int] = {
    InvalidCredentialsError: HTTP_401,
    AuthenticationRequiredError: HTTP_401,
    InvalidSessionError: HTTP_401,
    GoogleAuthError: HTTP_401,
    LoginNotVerifiedError: HTTP_403,
    ResetNotVerifiedError: HTTP_400,
    AlreadyVerifiedError: HTTP_400,
    InvalidTokenError: HTTP_400,
    WeakPasswordError: HTTP_400,
    EmailAlreadyRegisteredError: HTTP_409,
    AccountNotFoundError: HTTP_404,
    UserNotFoundError: HTTP_404,
    EmailDeliveryError: HTTP_500,
}

CHAT_STATUS: dict[type[ChatDomainError], int] = {
    ChatNotFoundError: HTTP_404,
    InvalidChatTitleError: HTTP_400,
    EmptyConversationError: HTTP_400,
    EmptyChatError: HTTP_400,
    ChatServiceNotConfiguredError: HTTP_500,
}

# provider error code -> (status, client message)
COMPLETION_ERRORS: dict[str, tuple[int, str]] = {
    "insufficient_quota": (HTTP_429, "API quota exceeded. Please check your billing."),
    "invalid_api_key": (HTTP_401, "Invalid API key configuration."),
    "model_not_found": (HTTP_404, "AI model not available."),
}


def _error_response(
    status_code: int,
    error: str,
    detail: Optional[str] = None,
    **extra: Any,
) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, Any] = {"error": error}
    if detail:
        body["detail"] = detail
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def _status_for(exc: Exception, table: dict, default: int = HTTP_500) -> int:
    """Look up the most specific mapped class in the error's MRO."""
    for cls in type(exc).__mro__:
        if cls in table:
            return table[cls]
    return default


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(LoginNotVerifiedError)
    async def handle_login_not_verified(
        _request: Request, exc: LoginNotVerifiedError
    ) -> JSONResponse:
        """Unverified password account tried to log in."""
        logger.info("Login refused for unverified account")
        return _error_response(HTTP_403, exc.message, requires_verification=True)

    @app.exception_handler(AuthDomainError)
    async def handle_auth_domain(_request: Request, exc: AuthDomainError) -> JSONResponse:
        """Map auth errors to their fixed status codes."""
        status_code = _status_for(exc, AUTH_STATUS)
        if status_code >= HTTP_500:
            logger.error("Auth failure: %s", exc.message)
        else:
            logger.warning("Auth error %s: %s", type(exc).__name__, exc.message)
        return _error_response(status_code, exc.message)

    @app.exception_handler(CompletionError)
    async def handle_completion(_request: Request, exc: CompletionError) -> JSONResponse:
        """Provider rejected a completion before any output was sent."""
        logger.error("Completion provider error (code=%s): %s", exc.code, exc.message)
        status_code, message = COMPLETION_ERRORS.get(
            exc.code or "", (HTTP_500, exc.message or "An unexpected error occurred")
        )
        return _error_response(status_code, message)

    @app.exception_handler(ChatDomainError)
    async def handle_chat_domain(_request: Request, exc: ChatDomainError) -> JSONResponse:
        """Map chat errors to their fixed status codes."""
        status_code = _status_for(exc, CHAT_STATUS)
        if status_code >= HTTP_500:
            logger.error("Chat failure: %s", exc.message)
        else:
            logger.warning("Chat error %s: %s", type(exc).__name__, exc.message)
        return _error_response(status_code, exc.message)

    @app.exception_handler(SymbolNotFoundError)
    async def handle_symbol_not_found(
        _request: Request, exc: SymbolNotFoundError
    ) -> JSONResponse:
        """Handle pairs the exchange does not list."""
        logger.warning("Symbol not found: %s", exc.symbol)
        return _error_response(HTTP_404, exc.message)

    @app.exception_handler(UpstreamRateLimitedError)
    async def handle_upstream_rate_limited(
        _request: Request, exc: UpstreamRateLimitedError
    ) -> JSONResponse:
        logger.warning("%s rate limit with nothing cached", exc.source)
        return _error_response(HTTP_429, exc.message)

    @app.exception_handler(MarketDataUnavailableError)
    async def handle_market_data_unavailable(
        _request: Request, exc: MarketDataUnavailableError
    ) -> JSONResponse:
        """Upstream market API failed; the reason is logged, not returned."""
        logger.error("Market data unavailable from %s: %s", exc.source, exc.reason)
        return _error_response(HTTP_502, f"Failed to fetch data from {exc.source}")

    @app.exception_handler(MarketDomainError)
    async def handle_market_domain(
        _request: Request, exc: MarketDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled market domain errors."""
        logger.error("Unhandled market domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
