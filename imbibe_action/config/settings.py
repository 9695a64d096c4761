"""
Application settings.

Typed, immutable view of the environment (RPC URL, API bind address, logging)
shared by the API server and the local entrypoint.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from imbibe_action.config.env import get_log_format, get_log_level, get_solana_rpc_url, load_imbibe_env


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    solana_rpc_url: str
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "info"
    log_format: str = "json"

    @classmethod
    def load(cls) -> "Settings":
        """Load configuration from environment variables (and .env)."""
        load_imbibe_env()

        api_port_raw = os.getenv("API_PORT", "").strip() or "8000"
        try:
            api_port = int(api_port_raw)
        except ValueError as exc:
            raise ValueError("API_PORT must be an integer.") from exc
        if api_port <= 0:
            raise ValueError("API_PORT must be greater than zero.")

        return cls(
            solana_rpc_url=get_solana_rpc_url(),
            api_host=os.getenv("API_HOST", "").strip() or "0.0.0.0",
            api_port=api_port,
            log_level=get_log_level().lower(),
            log_format=get_log_format(),
        )


def get_settings() -> Settings:
    """Return the current application settings, read fresh from the environment."""
    return Settings.load()
