"""FastAPI application main module

App creation + lifespan: record store open/close, middleware, routes,
exception handlers and the optional static front end.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from taskboard.core.config import get_db_path, get_store_backend
from taskboard.core.store import create_record_store

from .config import load_gateway_config
from .errors import register_error_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the record store on startup, close it on shutdown"""
    backend = get_store_backend()
    db_path = get_db_path()
    app.state.record_store = await create_record_store(backend, db_path)
    log.info(
        "record_store_initialized",
        backend=backend,
        db_path=db_path if backend == "sqlite" else None,
    )

    yield

    if getattr(app.state, "record_store", None) is not None:
        await app.state.record_store.close()


def create_app() -> FastAPI:
    """Create the FastAPI application"""
    config = load_gateway_config()

    app = FastAPI(
        title="Taskboard Gateway",
        version="0.1.0",
        description="Task/record tracker REST API",
        lifespan=lifespan,
    )

    # Trace first, then Logging (Logging ends up outermost)
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_logging()
    setup_logfire(app)

    register_error_handlers(app)

    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    # Mounted after the API routes so /api/* always wins
    if config.static_dir.is_dir():
        app.mount(
            "/",
            StaticFiles(directory=str(config.static_dir), html=True),
            name="frontend",
        )

    return app


def run() -> None:
    """Console entry: serve the app with uvicorn"""
    config = load_gateway_config()
    uvicorn.run(
        "taskboard.gateway.main:app",
        host=config.host,
        port=config.port,
    )


# Default app instance (uvicorn entry)
app = create_app()
