"""
Exception hierarchy for Moltbrain.

Every error carries a machine-readable code and a context dictionary so it
can be logged or returned to a caller without losing detail.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for monitoring and alerting."""

    # Configuration errors (1xxx)
    CONFIG_INVALID = "E1001"

    # Context assembly errors (2xxx)
    CONTEXT_ASSEMBLY_FAILED = "E2001"
    CONTEXT_INVALID_BUDGET = "E2002"
    CONTEXT_INVALID_MODE = "E2003"


class MoltbrainError(Exception):
    """
    Base exception for all Moltbrain errors.

    Provides:
    - Error code for monitoring
    - Context for debugging
    - The wrapped cause, if any
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """
        Initialize Moltbrain error.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional context for debugging
            cause: Original exception if this is a wrapped error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.error_code.value,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None
        }

    def __str__(self) -> str:
        """String representation with error code."""
        return f"[{self.error_code.value}] {self.message}"


# Configuration Errors
class ConfigurationError(MoltbrainError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, ErrorCode.CONFIG_INVALID, context, cause)


# Context Errors
class ContextError(MoltbrainError):
    """Base class for context assembly errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONTEXT_ASSEMBLY_FAILED,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, error_code, context, cause)


class InvalidBudgetError(ContextError, ValueError):
    """Token budget is not a non-negative integer."""

    def __init__(self, max_tokens: Any):
        super().__init__(
            f"max_tokens must be a non-negative integer, got {max_tokens!r}",
            ErrorCode.CONTEXT_INVALID_BUDGET,
            {"max_tokens": repr(max_tokens)}
        )


class InvalidRenderModeError(ContextError, ValueError):
    """Unknown rendering mode."""

    def __init__(self, mode: Any, allowed: Optional[list] = None):
        allowed = allowed or []
        super().__init__(
            f"Unknown render mode {mode!r}, expected one of {allowed}",
            ErrorCode.CONTEXT_INVALID_MODE,
            {"mode": repr(mode), "allowed": allowed}
        )


__all__ = [
    "ErrorCode",
    "MoltbrainError",
    "ConfigurationError",
    "ContextError",
    "InvalidBudgetError",
    "InvalidRenderModeError",
]
