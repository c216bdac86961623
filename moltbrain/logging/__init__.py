"""Logging package."""

from moltbrain.logging.logger import StructuredLogger, JSONFormatter, get_logger, LogLevel

__all__ = ["StructuredLogger", "JSONFormatter", "get_logger", "LogLevel"]
