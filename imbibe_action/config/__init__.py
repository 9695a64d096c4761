"""
Configuration for Imbibe Action.

Loads settings from environment variables and an optional project-root .env.
"""

from imbibe_action.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
