"""ClientConfig -- API client configuration

Loaded from environment variables; nothing is hard-coded at call sites.
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

DEFAULT_TIMEOUT_S = 10.0


class ClientConfig(BaseModel):
    """Client configuration -- loaded from environment variables

    Environment variables:
        TASKBOARD_API_URL: gateway base URL (default http://localhost:3000)
        TASKBOARD_API_TIMEOUT_S: request timeout in seconds (default 10)
    """

    base_url: str = Field(
        default="http://localhost:3000",
        description="Gateway base URL, without the /api/tasks suffix",
    )
    timeout_s: float = Field(
        default=DEFAULT_TIMEOUT_S,
        gt=0,
        description="Per-request timeout (seconds)",
    )


def load_client_config() -> ClientConfig:
    """Load ClientConfig from environment variables

    Returns:
        ClientConfig instance
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKBOARD_API_URL"):
        kwargs["base_url"] = val.rstrip("/")

    if val := os.environ.get("TASKBOARD_API_TIMEOUT_S"):
        try:
            timeout_s = float(val)
            if timeout_s <= 0:
                raise ValueError(val)
            kwargs["timeout_s"] = timeout_s
        except ValueError:
            log.warning(
                "invalid_timeout_config",
                env_var="TASKBOARD_API_TIMEOUT_S",
                value=val,
                fallback=DEFAULT_TIMEOUT_S,
            )

    return ClientConfig(**kwargs)
