"""
Environment variable loading for Imbibe Action.

- SOLANA_RPC_URL: RPC endpoint (default: public mainnet-beta)
- API_HOST / API_PORT: local uvicorn bind address
- LOG_LEVEL / LOG_FORMAT: structlog level and renderer (json | console)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv

# Project root: config is imbibe_action/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
ALLOWED_RPC_SCHEMES = ("http", "https")


def load_imbibe_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides the process env."""
    load_dotenv(_ENV_PATH, override=False)


def validate_rpc_url(url: str) -> str:
    """Return url if it is an http(s) URL with a host; raise ValueError otherwise."""
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_RPC_SCHEMES or not parsed.netloc:
        raise ValueError(f"SOLANA_RPC_URL must be an http(s) URL, got {url!r}")
    return url


def get_solana_rpc_url() -> str:
    """
    Resolve Solana RPC URL from env.
    Order: SOLANA_RPC_URL > public mainnet-beta endpoint.
    """
    load_imbibe_env()
    url = (os.getenv("SOLANA_RPC_URL") or "").strip()
    if not url:
        return MAINNET_RPC_URL
    return validate_rpc_url(url)


def mask_rpc_url(url: str) -> str:
    """Hide API keys embedded in provider URLs before logging them."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    return url


def get_log_level() -> str:
    """LOG_LEVEL from env or .env (default INFO)."""
    load_imbibe_env()
    return (os.getenv("LOG_LEVEL") or "").strip().upper() or "INFO"


def get_log_format() -> str:
    """LOG_FORMAT from env or .env: json (default) | console."""
    load_imbibe_env()
    return (os.getenv("LOG_FORMAT") or "").strip().lower() or "json"
