"""
Floreria Backend — API Prefix Middleware
==========================================

What:  Strips the configured prefix (default "/api") from the request path
       before routing, so /api/ramos and /ramos reach the same handler.
How:   Rewrites scope["path"] (and raw_path) in place. Only a whole leading
       segment is stripped: /api/ramos → /ramos, /api → /, /apiary untouched.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


def strip_prefix(path: str, prefix: str) -> str:
    """
    >>> strip_prefix("/api/ramos/3", "/api")
    '/ramos/3'
    >>> strip_prefix("/api", "/api")
    '/'
    """
    if not prefix:
        return path
    if path == prefix:
        return "/"
    if path.startswith(prefix + "/"):
        return path[len(prefix):]
    return path


class ApiPrefixMiddleware(BaseHTTPMiddleware):

    def __init__(self, app: ASGIApp, prefix: str = "/api"):
        super().__init__(app)
        self.prefix = prefix

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.scope["path"]
        normalized = strip_prefix(path, self.prefix)
        if normalized != path:
            request.scope["path"] = normalized
            raw_path = request.scope.get("raw_path")
            if raw_path:
                request.scope["raw_path"] = raw_path[len(self.prefix):] or b"/"
        return await call_next(request)
