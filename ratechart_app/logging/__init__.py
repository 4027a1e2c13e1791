"""
Logging configuration and utilities for the rate chart engine.
"""
from .config import configure_logging, get_logger, log_fallback_decision

__all__ = ["configure_logging", "get_logger", "log_fallback_decision"]
