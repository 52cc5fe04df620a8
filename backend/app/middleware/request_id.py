"""
Floreria Backend — Request ID Middleware
==========================================

What:  Tags each request with a short correlation id, returned to the client
       as X-Request-ID and included in every log line written while the
       request is handled.
How:   The mobile client may send its own X-Request-ID (it does so when
       retrying a pedido). A client id is kept only if it is 1-64 characters
       of [A-Za-z0-9._-]; anything else is replaced, so header values never
       inject text into the access log. Generated ids are 8 hex characters.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Per-request value; the exception handlers in main.py read it too
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_client_id(value: str) -> bool:
    return bool(value) and CLIENT_ID_PATTERN.match(value) is not None


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        client_id = request.headers.get(REQUEST_ID_HEADER, "")
        rid = client_id if accept_client_id(client_id) else new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
