"""
Corridor model for the venue network.
Represents a directed, capacity-limited connector between two locations.
"""

from dataclasses import dataclass

from .exceptions import InvalidArgumentError
from .location import Location
from .validation import require_int


@dataclass(frozen=True, order=True)
class Corridor:
    """
    A traffic corridor from a start location to an end location.

    The capacity is the maximum number of people who can use the corridor
    at the same time. Corridors compare and sort by start location, then
    end location, then capacity:

        Corridor Annerly to City (20)
        Corridor Annerly to City (30)
        Corridor Bardon to Ascot (40)
        Corridor Bardon to City (10)
    """
    start: Location
    end: Location
    capacity: int

    def __post_init__(self):
        if not isinstance(self.start, Location) or not isinstance(self.end, Location):
            raise InvalidArgumentError("Corridor start and end must be Locations")
        if self.start == self.end:
            raise InvalidArgumentError(
                f"Corridor start and end must differ, both are {self.start}"
            )
        require_int(self.capacity, "Corridor capacity", 1)

    @classmethod
    def between(cls, start: str, end: str, capacity: int) -> 'Corridor':
        """Build a corridor from location names."""
        return cls(Location(start), Location(end), capacity)

    def __str__(self) -> str:
        return f"Corridor {self.start} to {self.end} ({self.capacity})"
