"""Observability – structured logging helpers."""
from cache_map.observability.logging.factory import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
