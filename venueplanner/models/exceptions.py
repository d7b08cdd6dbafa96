"""
Exceptions raised by the venue planner core.
"""


class PlannerError(Exception):
    """Base class for all venue planner errors."""


class InvalidArgumentError(PlannerError, ValueError):
    """Raised when an argument is missing, duplicated or malformed."""


class InvalidTrafficError(PlannerError, ValueError):
    """Raised when a traffic update would drive a corridor load below zero."""
