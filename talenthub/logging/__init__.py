"""Logging setup for talenthub."""

from talenthub.logging.setup import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
