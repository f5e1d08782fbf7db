"""
Secure HTTP headers middleware.

Adds security-related headers to responses produced inside the
middleware stack. Headers a handler set explicitly are left alone.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'",
    "Cache-Control": "no-store",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds secure HTTP headers to every response.

    Args:
        app: The wrapped ASGI application.
        headers: Overrides merged on top of SECURE_HEADERS.
    """

    def __init__(self, app: ASGIApp, headers: dict[str, str] | None = None) -> None:
        super().__init__(app)
        self.headers = {**SECURE_HEADERS, **(headers or {})}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for header_name, header_value in self.headers.items():
            if header_name not in response.headers:
                response.headers[header_name] = header_value
        return response
