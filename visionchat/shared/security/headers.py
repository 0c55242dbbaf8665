"""
Secure HTTP headers middleware.

Every response is JSON or an event stream, so the content policy
forbids loading anything. The interactive docs (debug only) pull their
assets from a CDN and keep the browser defaults. HSTS is sent only on
HTTPS requests.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

API_CONTENT_POLICY = "default-src 'none'; frame-ancestors 'none'"
HSTS_POLICY = "max-age=63072000; includeSubDomains"
DOCS_PATHS = ("/docs", "/redoc")

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds secure HTTP headers to every response.

    Streaming responses (chat SSE) pass through untouched apart from
    the headers, so the body is still delivered chunk by chunk.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(SECURE_HEADERS)
        if not request.url.path.startswith(DOCS_PATHS):
            response.headers["Content-Security-Policy"] = API_CONTENT_POLICY
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = HSTS_POLICY
        return response
