"""Security headers middleware (Helmet-style)."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

# CSP for Swagger UI: requires inline scripts and CDN assets
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "img-src 'self' data: cdn.jsdelivr.net fastapi.tiangolo.com; "
    "frame-ancestors 'none'"
)

# Header defaults mirroring Helmet's; None means "not sent"
DEFAULT_HEADERS: dict[str, str | None] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "0",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response (similar to Helmet.js)."""

    def __init__(
        self,
        app: ASGIApp,
        content_security_policy: str | None = None,
        overrides: dict[str, str | None] | None = None,
    ):
        super().__init__(app)
        merged = dict(DEFAULT_HEADERS)
        merged["Content-Security-Policy"] = (
            content_security_policy if content_security_policy is not None else DOCS_CSP
        )
        if overrides:
            merged.update(overrides)
        # Empty strings and None both disable a header
        self.headers: dict[str, str] = {name: value for name, value in merged.items() if value}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header, value in self.headers.items():
            response.headers[header] = value
        return response
