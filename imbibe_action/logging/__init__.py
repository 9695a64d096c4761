"""
Structured logging for Imbibe Action.

On first import structlog is configured from LOG_LEVEL / LOG_FORMAT, with the
project .env already loaded. main.py reconfigures from Settings.
"""

import structlog

from imbibe_action.config.env import get_log_format, get_log_level
from imbibe_action.logging.logger import bind_request, configure_structlog, get_logger

if not structlog.is_configured():
    configure_structlog(get_log_level(), get_log_format())

__all__ = ["bind_request", "configure_structlog", "get_logger"]
