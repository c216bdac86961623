"""Structured logging for Moltbrain."""

import logging
import json
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional, Union
from enum import Enum


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}


class StructuredLogger:
    """
    Structured logger for context assembly.

    Outputs logs in JSON format for easy parsing and analysis.
    """

    def __init__(
        self,
        name: str,
        level: LogLevel = LogLevel.INFO,
        extra_fields: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Logging level
            extra_fields: Additional fields to include in all logs
        """
        self.name = name
        self.level = LogLevel(level)
        self.extra_fields = extra_fields or {}
        self._logger = logging.getLogger(name)
        self._configure_logger()

    def _configure_logger(self) -> None:
        """Configure the underlying logger."""
        self._logger.setLevel(_LEVELS[self.level])

        # Remove existing handlers
        self._logger.handlers = []

        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        self._logger.addHandler(handler)

    def _log(
        self,
        level: LogLevel,
        message: str,
        **kwargs: Any
    ) -> None:
        """
        Internal logging method.

        Args:
            level: Log level
            message: Log message
            **kwargs: Additional fields
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.value,
            "logger": self.name,
            "message": message,
            **self.extra_fields,
            **kwargs
        }

        self._logger.log(_LEVELS[level], json.dumps(log_data, default=str))

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, message, **kwargs)

    def log_assembly(
        self,
        mode: str,
        max_tokens: int,
        tokens_used: int,
        observations_offered: int,
        observations_included: int,
        summary_included: bool,
        **kwargs: Any
    ) -> None:
        """
        Log one context assembly.

        Args:
            mode: Rendering mode used
            max_tokens: Requested budget
            tokens_used: Estimated tokens in the assembled text
            observations_offered: Candidates passed in
            observations_included: Candidates that made it into the text
            summary_included: Whether the session summary fit
            **kwargs: Additional fields
        """
        self.info(
            "Context assembled",
            mode=mode,
            max_tokens=max_tokens,
            tokens_used=tokens_used,
            observations_offered=observations_offered,
            observations_included=observations_included,
            summary_included=summary_included,
            **kwargs
        )

    def log_truncation(
        self,
        mode: str,
        max_tokens: int,
        observations_offered: int,
        observations_included: int,
        excluded_ids: List[Union[str, int]],
        **kwargs: Any
    ) -> None:
        """Log observations dropped because the budget ran out."""
        self.warning(
            "Observations excluded by token budget",
            mode=mode,
            max_tokens=max_tokens,
            observations_offered=observations_offered,
            observations_included=observations_included,
            excluded_ids=excluded_ids,
            **kwargs
        )


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        # The message is already JSON from StructuredLogger
        return record.getMessage()


def get_logger(
    name: str,
    level: LogLevel = LogLevel.INFO,
    **extra_fields: Any
) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name
        level: Logging level
        **extra_fields: Additional fields to include in all logs

    Returns:
        Structured logger instance
    """
    return StructuredLogger(name, level, extra_fields)
