"""Security headers middleware."""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

# JSON responses never load subresources
API_CSP = "default-src 'none'; frame-ancestors 'none'"

# Swagger UI and ReDoc (debug only) pull their assets from a CDN
DOCS_PATHS = ("/docs", "/redoc")
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "img-src 'self' data: https://fastapi.tiangolo.com; "
    "frame-ancestors 'none'"
)


def _is_docs_path(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in DOCS_PATHS)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response, including auth rejections."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        headers = response.headers

        headers["X-Content-Type-Options"] = "nosniff"
        headers["X-Frame-Options"] = "DENY"
        headers["Referrer-Policy"] = "no-referrer"
        # Ping lists and tokens must not be cached by intermediaries
        headers["Cache-Control"] = "no-store"
        headers["Content-Security-Policy"] = (
            DOCS_CSP if _is_docs_path(request.url.path) else API_CSP
        )

        if request.headers.get("x-forwarded-proto") == "https" or request.url.scheme == "https":
            headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
