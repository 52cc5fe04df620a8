"""
Floreria Backend — Request Logging Middleware
===============================================

What:  One log line per request: method, path, status, duration, request id,
       client IP.
How:   Level follows the status class (5xx ERROR, 4xx WARNING, else INFO).
       Health probes are not logged; monitors hit them every few seconds.

Request bodies are never logged: pedidos carry customer names, addresses
and phone numbers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.middleware.request_id import request_id_var

logger = logging.getLogger("floreria.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    def __init__(self, app: ASGIApp, api_prefix: str = "/api"):
        super().__init__(app)
        self.quiet_paths = {"/health", f"{api_prefix}/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path in self.quiet_paths:
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
