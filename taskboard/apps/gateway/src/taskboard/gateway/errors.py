"""Exception handlers -- store errors to JSON responses

RecordValidationError / request validation -> 400
RecordNotFoundError -> 404
StoreError, anything unexpected -> 500

Failure bodies are always {"error": ..., "message": ...}.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from taskboard.core.exceptions import (
    RecordNotFoundError,
    RecordValidationError,
    StoreError,
    TaskboardError,
)

log = structlog.get_logger()

_STATUS_CODES: dict[type[TaskboardError], int] = {
    RecordValidationError: 400,
    RecordNotFoundError: 404,
    StoreError: 500,
}


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message},
    )


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    status_code = next(
        (code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)),
        500,
    )
    if status_code >= 500:
        log.error("store_error", error=exc.error, message=exc.message)
    else:
        log.info("request_rejected", status_code=status_code, error=exc.error)
    return error_response(status_code, exc.error, exc.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: any other failure still answers with the JSON error body"""
    log.error(
        "unhandled_error",
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(500, StoreError.error, "Unexpected server error")


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    log.info("request_rejected", status_code=400, error="Validation failed")
    return error_response(400, "Validation failed", details)


def register_error_handlers(app: FastAPI) -> None:
    """Install the store/validation exception handlers on app"""
    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
