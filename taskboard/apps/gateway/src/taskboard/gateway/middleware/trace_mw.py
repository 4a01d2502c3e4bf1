"""TraceMiddleware -- bind record_id for single-record requests

For /api/tasks/{id} paths the id is bound to structlog contextvars so every
log line of the request carries it.
"""

import re

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# ULID: 26 Crockford base32 characters
_RECORD_PATH = re.compile(r"^/api/tasks/([0-9A-HJKMNP-TV-Z]{26})/?$")


def extract_record_id(path: str) -> str | None:
    """Record id from a /api/tasks/{id} path, or None"""
    match = _RECORD_PATH.match(path)
    return match.group(1) if match else None


class TraceMiddleware(BaseHTTPMiddleware):
    """Record-level trace middleware"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        record_id = extract_record_id(request.url.path)
        if record_id:
            structlog.contextvars.bind_contextvars(record_id=record_id)

        return await call_next(request)
