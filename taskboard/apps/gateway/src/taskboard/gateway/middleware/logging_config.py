"""structlog configuration module

dev mode: pretty console output
json mode: structured JSON output
Logfire APM: controlled by LOGFIRE_SEND_TO_LOGFIRE; falls back to local logs when off.
"""

import logging
import os

import structlog
from fastapi import FastAPI


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """Initialize structlog and route stdlib logging through it

    Args:
        log_format: "json" or "dev"; defaults to TASKBOARD_LOG_FORMAT (dev)
        log_level: level name; defaults to TASKBOARD_LOG_LEVEL (INFO)
    """
    log_format = log_format or os.environ.get("TASKBOARD_LOG_FORMAT", "dev")
    log_level = log_level or os.environ.get("TASKBOARD_LOG_LEVEL", "INFO")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        # tracebacks become structured fields instead of a preformatted string
        shared_processors.append(structlog.processors.dict_tracebacks)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # uvicorn access lines duplicate LoggingMiddleware output
    logging.getLogger("uvicorn.access").handlers.clear()
    logging.getLogger("uvicorn.access").propagate = False


def setup_logfire(app: FastAPI) -> None:
    """Optional Logfire initialization

    LOGFIRE_SEND_TO_LOGFIRE:
    - "true": enable Logfire APM (needs LOGFIRE_TOKEN and the logfire extra)
    - "false" (default): local logs only

    Args:
        app: application whose requests become Logfire spans
    """
    send_to_logfire = os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower()
    if send_to_logfire != "true":
        return
    try:
        import logfire

        logfire.configure()
        logfire.instrument_fastapi(app)
    except Exception as e:
        # APM is optional; keep serving with local logs
        structlog.get_logger().warning("logfire_init_failed", error=str(e))
