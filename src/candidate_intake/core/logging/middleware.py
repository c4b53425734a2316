# candidate_intake/core/logging/middleware.py
"""
Request ID middleware for FastAPI / Starlette.

Each request gets an id: the incoming `X-Request-ID` header when it looks safe,
otherwise a fresh UUID4. The id is stored in the request_id contextvar for the
duration of the request (picked up by RequestIdFilter) and echoed back in the
`X-Request-ID` response header.

Register it before routers that may log:
    app.add_middleware(RequestIDMiddleware)
"""

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"

# Opaque token, no whitespace or control characters (log injection).
_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9._\-]{1,64}")


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _SAFE_REQUEST_ID.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request id to the logging context and to the response headers."""

    async def dispatch(self, request: Request, call_next):
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
