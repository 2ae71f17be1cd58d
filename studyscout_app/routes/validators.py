"""Lightweight request validation helpers."""

from typing import Any, Optional, Tuple


MISSING_QUERY_MESSAGE = "Please provide a search term"
INVALID_START_MESSAGE = "start must be an integer"


def sanitize_string(value: Any) -> str:
    """
    Sanitize a string by removing control characters.

    The length is left alone; search terms go upstream whole.
    """
    if not isinstance(value, str):
        return ""

    return ''.join(c for c in value if c >= ' ')


def validate_query(raw: Any) -> Tuple[str, Optional[str]]:
    """
    Validate the `q` search parameter.

    Returns:
        Tuple of (sanitized_query, error_or_none)
    """
    query = sanitize_string(raw).strip()
    if not query:
        return "", MISSING_QUERY_MESSAGE
    return query, None


def validate_start_index(raw: Any) -> Tuple[int, Optional[str]]:
    """
    Validate a 1-based `start` offset.

    Missing means 1; values below 1 are clamped to 1.

    Returns:
        Tuple of (start, error_or_none)
    """
    if raw in (None, ''):
        return 1, None
    try:
        start = int(raw)
    except (ValueError, TypeError):
        return 1, INVALID_START_MESSAGE
    return max(start, 1), None
