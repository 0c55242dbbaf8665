"""
Rate limiting configuration and setup.

Uses slowapi to enforce rate limits. Every route gets the default
limit through `SlowAPIMiddleware`; routes that spend LLM credits carry
the heavy limit as a decorator instead.

The 429 handler must stay synchronous for `SlowAPIMiddleware` to use it.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from visionchat.core.config import settings

limiter = Limiter(
    key_func=get_remote_address, default_limits=[settings.rate_limit_default]
)


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Handle rate limit exceeded errors with a clean JSON response.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.

    Returns:
        A 429 JSON response with a clear error message.
    """
    return JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded", "detail": str(exc.detail)},
    )
