"""Security utilities for error messages that leave the API."""

import re

# Error text longer than this is replaced rather than truncated
MAX_ERROR_MESSAGE_LENGTH = 80

_SENSITIVE_PATTERN = re.compile(r"token|password|secret|key=", re.IGNORECASE)


def is_sensitive_message(message: str) -> bool:
    """Check if an error message may carry credential material."""
    return bool(_SENSITIVE_PATTERN.search(message))


def sanitize_error_message(message: str | None, fallback: str) -> str:
    """
    Make an error message safe to return to API callers.

    Args:
        message: Raw error text (usually str(exception))
        fallback: Fixed generic message for the calling operation

    Returns:
        The original message when it is short and free of credential-looking
        substrings, otherwise the fallback.
    """
    if not message:
        return fallback
    if len(message) > MAX_ERROR_MESSAGE_LENGTH or is_sensitive_message(message):
        return fallback
    return message
