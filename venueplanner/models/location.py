"""
Location model: a named point in the municipality.
"""

from dataclasses import dataclass

from .validation import require_name


@dataclass(frozen=True, order=True)
class Location:
    """An immutable named point. Identity and ordering are by name."""
    name: str

    def __post_init__(self):
        require_name(self.name, "Location")

    def __str__(self) -> str:
        return self.name
