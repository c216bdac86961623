"""
Helpers shared by the renderers and the packer.
"""

import json
from typing import Any, List
import logging

from moltbrain.core.exceptions import InvalidBudgetError

logger = logging.getLogger("moltbrain.context.utils")

ELLIPSIS = "..."


def parse_array(value: Any) -> List[str]:
    """
    Coerce a list-typed record field into a list of strings.

    Stores hand these fields over either as a native list or as a
    JSON-encoded string. Anything that does not parse to a JSON array
    becomes an empty list.

    Args:
        value: List, JSON string, or anything else

    Returns:
        List of strings (possibly empty)
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        items = value
    elif isinstance(value, str):
        try:
            items = json.loads(value)
        except ValueError:
            logger.debug(f"Unparseable array field, treating as empty: {value[:50]!r}")
            return []
        if not isinstance(items, list):
            return []
    else:
        return []

    return [item if isinstance(item, str) else str(item) for item in items if item is not None]


def truncate(text: str, max_length: int) -> str:
    """
    Cut text to max_length characters, ending with an ellipsis.

    Text at or under the limit is returned unchanged; longer text keeps its
    first ``max_length - 3`` characters followed by ``"..."``.
    """
    if len(text) <= max_length:
        return text
    return text[:max(max_length - len(ELLIPSIS), 0)] + ELLIPSIS


def validate_budget(max_tokens: Any) -> int:
    """
    Validate a token budget at the call boundary.

    Args:
        max_tokens: Requested budget

    Returns:
        The budget as an int

    Raises:
        InvalidBudgetError: If the budget is not an integer or is negative
    """
    if isinstance(max_tokens, bool) or not isinstance(max_tokens, int):
        raise InvalidBudgetError(max_tokens)

    if max_tokens < 0:
        raise InvalidBudgetError(max_tokens)

    return max_tokens
