"""
SEA Catering API - Security Headers Middleware.

Adds hardening headers to every response.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from settings import settings


STATIC_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    # JSON API only; the web client sets its own CSP
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all responses.

    HSTS is only sent in production. Responses to authenticated requests
    are marked uncacheable since they carry per-user subscription data.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        for name, value in STATIC_HEADERS.items():
            response.headers.setdefault(name, value)

        if settings.ENV == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        if request.headers.get("Authorization"):
            response.headers["Cache-Control"] = "no-store, private"
            response.headers["Pragma"] = "no-cache"

        return response
