"""LoggingMiddleware -- per-request id and access log

Each request gets a request_id bound to structlog contextvars and echoed in
X-Request-ID. A caller-supplied X-Request-ID is reused when it is a ULID, so a
client can correlate its own log lines with the gateway's.
"""

import re
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

_ULID_RE = re.compile(r"^[0-9A-HJKMNP-TV-Z]{26}$")

# Probe endpoints are logged at debug level
_QUIET_PATHS = frozenset({"/health", "/ready"})


def resolve_request_id(header_value: str | None) -> str:
    """Inbound ULID request id, or a freshly generated one"""
    if header_value and _ULID_RE.match(header_value.strip().upper()):
        return header_value.strip().upper()
    return str(ULID())


class LoggingMiddleware(BaseHTTPMiddleware):
    """Request-level logging middleware"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        started = time.monotonic()
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )

        log = structlog.get_logger()
        if path not in _QUIET_PATHS:
            await log.ainfo("request_started")

        try:
            response = await call_next(request)
        except Exception:
            await log.aexception(
                "request_failed",
                duration_ms=int((time.monotonic() - started) * 1000),
            )
            raise

        duration_ms = int((time.monotonic() - started) * 1000)
        if response.status_code >= 500:
            await log.aerror("request_completed", status_code=response.status_code, duration_ms=duration_ms)
        elif path in _QUIET_PATHS:
            await log.adebug("request_completed", status_code=response.status_code, duration_ms=duration_ms)
        else:
            await log.ainfo("request_completed", status_code=response.status_code, duration_ms=duration_ms)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
