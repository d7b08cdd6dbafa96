"""
Event model: something that needs a venue.
"""

from dataclasses import dataclass

from .validation import require_int, require_name


@dataclass(frozen=True, order=True)
class Event:
    """An immutable (name, size) pair; size is the expected head-count."""
    name: str
    size: int

    def __post_init__(self):
        require_name(self.name, "Event")
        require_int(self.size, "Event size", 0)

    def __str__(self) -> str:
        return f"{self.name} ({self.size})"
