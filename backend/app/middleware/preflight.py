"""
Floreria Backend — Preflight Middleware
=========================================

What:  Answers every OPTIONS request with an empty 200, whatever the path
       and whatever method or headers the preflight asks for.
How:   Sits outside CORSMiddleware, so OPTIONS never reaches its allow-list
       checks (which would answer 400 for an unlisted method or header).
       The Access-Control-* headers are set here instead:

    Access-Control-Allow-Origin:      the request Origin (or "*" without one)
    Access-Control-Allow-Methods:     GET, POST, PUT, DELETE, OPTIONS
    Access-Control-Allow-Headers:     Content-Type, Authorization, Accept, X-Requested-With
    Access-Control-Allow-Credentials: true

Non-OPTIONS requests pass straight through to CORSMiddleware.
"""

from typing import Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

PREFLIGHT_MAX_AGE = 600


class PreflightMiddleware(BaseHTTPMiddleware):

    def __init__(
        self,
        app: ASGIApp,
        allow_origins: Sequence[str] = ("*",),
        allow_methods: Sequence[str] = (),
        allow_headers: Sequence[str] = (),
    ):
        super().__init__(app)
        self.allow_all_origins = "*" in allow_origins
        self.allow_origins = set(allow_origins)
        self.allow_methods = ", ".join(allow_methods)
        self.allow_headers = ", ".join(allow_headers)

    def preflight_headers(self, origin: str) -> dict:
        headers = {
            "Access-Control-Allow-Methods": self.allow_methods,
            "Access-Control-Allow-Headers": self.allow_headers,
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Max-Age": str(PREFLIGHT_MAX_AGE),
            "Vary": "Origin",
        }
        if not origin:
            headers["Access-Control-Allow-Origin"] = "*"
        elif self.allow_all_origins or origin in self.allow_origins:
            # Credentialed requests need the concrete origin, not "*"
            headers["Access-Control-Allow-Origin"] = origin
        return headers

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            origin = request.headers.get("origin", "")
            return Response(status_code=200, headers=self.preflight_headers(origin))
        return await call_next(request)
