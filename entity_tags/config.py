"""Environment-driven configuration.

Environment variables:
    ENTITY_TAGS_BACKEND       - "remote" (default) or "local"
    ENTITY_TAGS_API_URL       - Base URL of the remote tag service (remote backend)
    ENTITY_TAGS_ACCESS_TOKEN  - Bearer token forwarded to the remote service
    ENTITY_TAGS_TIMEOUT       - HTTP request timeout in seconds (default: 30)
    LOG_LEVEL                 - Logging level (default: INFO)

A .env file in the working directory is loaded if present.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

BACKEND_LOCAL = "local"
BACKEND_REMOTE = "remote"

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class EntityTagSettings:
    """Settings for building an entity tag service."""
    backend: str = BACKEND_REMOTE
    api_url: str = ""
    access_token: str = ""
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "EntityTagSettings":
        """Build settings from environment variables (and .env).

        Raises:
            ValueError: If ENTITY_TAGS_TIMEOUT is not a number
        """
        load_dotenv()

        timeout_raw = os.environ.get("ENTITY_TAGS_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"ENTITY_TAGS_TIMEOUT must be a number, got {timeout_raw!r}") from None

        return cls(
            backend=os.environ.get("ENTITY_TAGS_BACKEND", BACKEND_REMOTE).strip().lower(),
            api_url=os.environ.get("ENTITY_TAGS_API_URL", ""),
            access_token=os.environ.get("ENTITY_TAGS_ACCESS_TOKEN", ""),
            timeout=timeout,
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
