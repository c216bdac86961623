"""
Token estimation for context budgets.

Budgets are enforced against an approximate token count: a fixed ratio of
characters to tokens. The estimate ignores the real vocabulary of any model,
so every budget computed from it inherits the approximation error. Swap in a
different ``TokenEstimator`` to count against a real tokenizer.
"""

from abc import ABC, abstractmethod
from typing import Optional


DEFAULT_CHARS_PER_TOKEN = 4


class TokenEstimator(ABC):
    """Maps text to a token count."""

    @abstractmethod
    def count_tokens(self, text: Optional[str]) -> int:
        """
        Count tokens in text.

        Args:
            text: Text to count tokens for

        Returns:
            Number of tokens (0 for empty text)
        """


class CharRatioEstimator(TokenEstimator):
    """
    Approximate token counting at a fixed characters-per-token ratio.

    Length is measured in code points, so a multi-byte character counts as one.

    Example:
        ```python
        estimator = CharRatioEstimator()
        estimator.count_tokens("Hello, world!")  # 4
        ```
    """

    def __init__(self, chars_per_token: int = DEFAULT_CHARS_PER_TOKEN):
        """
        Initialize estimator.

        Args:
            chars_per_token: Characters counted as one token
        """
        if chars_per_token < 1:
            raise ValueError("chars_per_token must be >= 1")
        self.chars_per_token = chars_per_token

    def count_tokens(self, text: Optional[str]) -> int:
        if not text:
            return 0
        # ceil(len / ratio) in integer arithmetic
        return -(-len(text) // self.chars_per_token)

    def __repr__(self) -> str:
        return f"CharRatioEstimator(chars_per_token={self.chars_per_token})"


_default_estimator = CharRatioEstimator()


def estimate_tokens(text: Optional[str]) -> int:
    """Estimate tokens with the default 4-characters-per-token ratio."""
    return _default_estimator.count_tokens(text)


__all__ = [
    "TokenEstimator",
    "CharRatioEstimator",
    "DEFAULT_CHARS_PER_TOKEN",
    "estimate_tokens",
]
