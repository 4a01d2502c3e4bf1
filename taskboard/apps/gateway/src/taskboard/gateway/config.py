"""GatewayConfig -- HTTP server configuration

Loaded from environment variables at app creation.
"""

import os
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()


class GatewayConfig(BaseModel):
    """Gateway configuration -- loaded from environment variables

    Environment variables:
        TASKBOARD_HOST: bind host (default 0.0.0.0)
        TASKBOARD_PORT: bind port (default 3000)
        TASKBOARD_STATIC_DIR: front-end asset directory mounted at /
        TASKBOARD_CORS_ORIGINS: comma-separated allowed origins (default *)
    """

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    static_dir: Path = Field(default=Path("public"))
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


def load_gateway_config() -> GatewayConfig:
    """Load GatewayConfig from environment variables

    An unparsable port is logged and replaced by the default.
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKBOARD_HOST"):
        kwargs["host"] = val

    if val := os.environ.get("TASKBOARD_PORT"):
        try:
            kwargs["port"] = int(val)
        except ValueError:
            log.warning(
                "invalid_port_config",
                env_var="TASKBOARD_PORT",
                value=val,
                fallback=3000,
            )

    if val := os.environ.get("TASKBOARD_STATIC_DIR"):
        kwargs["static_dir"] = Path(val)

    if val := os.environ.get("TASKBOARD_CORS_ORIGINS"):
        kwargs["cors_origins"] = [o.strip() for o in val.split(",") if o.strip()]

    return GatewayConfig(**kwargs)
