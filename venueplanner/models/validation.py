"""
Argument checks shared by the value types.
"""

from typing import Any

from .exceptions import InvalidArgumentError


def require_name(value: Any, what: str) -> str:
    """Return value if it is a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{what} name must be a non-empty string")
    return value


def require_int(value: Any, what: str, minimum: int) -> int:
    """Return value if it is an integer no smaller than minimum."""
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{what} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidArgumentError(f"{what} must be >= {minimum}, got {value}")
    return value
