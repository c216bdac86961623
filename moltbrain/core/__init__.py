"""
Moltbrain Core - Shared infrastructure.

- Exception hierarchy with error codes
- Prometheus metrics for context assembly
- Settings loaded from environment and YAML (``moltbrain.core.config``)
"""

from moltbrain.core.exceptions import (
    MoltbrainError,
    ErrorCode,
    ConfigurationError,
    ContextError,
    InvalidBudgetError,
    InvalidRenderModeError,
)

from moltbrain.core.observability import MetricsCollector

__all__ = [
    "MoltbrainError",
    "ErrorCode",
    "ConfigurationError",
    "ContextError",
    "InvalidBudgetError",
    "InvalidRenderModeError",
    "MetricsCollector",
]
