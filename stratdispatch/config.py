"""stratdispatch: application configuration.

Loads .env variables into a typed config object.
Validates values on startup.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from stratdispatch.strategy.registry import DUPLICATE_POLICIES


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    log_level: str
    duplicate_policy: str  # "fail" or "replace"
    api_host: str
    api_port: int

    @property
    def api_url(self) -> str:
        """Base URL of the embedded HTTP API."""
        return f"http://{self.api_host}:{self.api_port}"


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Raises ``ValueError`` with a message naming the offending variable when
    a value cannot be used.
    """
    load_dotenv(dotenv_path=env_path)

    policy = os.environ.get("DUPLICATE_KEY_POLICY", "fail").strip().lower()
    if policy not in DUPLICATE_POLICIES:
        raise ValueError(
            f"DUPLICATE_KEY_POLICY must be one of {', '.join(DUPLICATE_POLICIES)}, "
            f"got '{policy}'"
        )

    raw_port = os.environ.get("API_PORT", "8080")
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"API_PORT must be an integer, got '{raw_port}'") from None
    if not 0 < port < 65536:
        raise ValueError(f"API_PORT must be between 1 and 65535, got {port}")

    return Config(
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        duplicate_policy=policy,
        api_host=os.environ.get("API_HOST", "127.0.0.1"),
        api_port=port,
    )
