"""Observability - structured logging."""

from .logger import LOG_LEVELS, configure_logging, get_log_level

__all__ = ["LOG_LEVELS", "configure_logging", "get_log_level"]
