"""
Venue model.
A venue hosts at most one event and generates traffic on the corridors
connected to it.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from .corridor import Corridor
from .event import Event
from .exceptions import InvalidArgumentError
from .traffic import Traffic
from .validation import require_int, require_name


CorridorRates = Union[Mapping[Corridor, int], Iterable[Tuple[Corridor, int]]]


def _normalise_rates(corridors: CorridorRates) -> Tuple[Tuple[Corridor, int], ...]:
    """Turn a mapping or pair iterable into a sorted, duplicate-free tuple."""
    pairs = corridors.items() if isinstance(corridors, Mapping) else corridors
    seen = set()
    normalised = []
    for pair in pairs:
        try:
            corridor, rate = pair
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(
                f"venue corridors must be (corridor, rate) pairs, got {pair!r}"
            ) from exc
        if not isinstance(corridor, Corridor):
            raise InvalidArgumentError(f"expected a Corridor, got {corridor!r}")
        if corridor in seen:
            raise InvalidArgumentError(f"{corridor} is listed more than once")
        require_int(rate, f"Rate on {corridor}", 0)
        seen.add(corridor)
        normalised.append((corridor, rate))
    return tuple(sorted(normalised))


@dataclass(frozen=True, order=True)
class Venue:
    """
    A place that can host one event.

    Each corridor entry pairs a Corridor with a rate: the number of people
    the venue puts on that corridor when it hosts an event that fills its
    whole capacity. Smaller events scale the load down proportionally,
    rounding up.
    """
    name: str
    capacity: int
    corridors: Tuple[Tuple[Corridor, int], ...] = field(default=())

    def __post_init__(self):
        require_name(self.name, "Venue")
        require_int(self.capacity, "Venue capacity", 1)
        object.__setattr__(self, 'corridors', _normalise_rates(self.corridors))

    @property
    def corridor_rates(self) -> Dict[Corridor, int]:
        """Corridor -> full-capacity load."""
        return dict(self.corridors)

    def get_corridors(self) -> List[Corridor]:
        """Corridors this venue sends traffic through, in natural order."""
        return [corridor for corridor, _ in self.corridors]

    def can_host(self, event: Event) -> bool:
        """An event fits when its size does not exceed the venue capacity."""
        if not isinstance(event, Event):
            raise InvalidArgumentError(f"expected an Event, got {event!r}")
        return event.size <= self.capacity

    def load_for(self, size: int, rate: int) -> int:
        """ceil(size * rate / capacity) in exact integer arithmetic."""
        return -(-size * rate // self.capacity)

    def traffic_for(self, event: Event) -> Traffic:
        """
        Return the traffic generated by hosting ``event`` at this venue.

        A fresh Traffic is built on every call; the venue holds no state
        between calls.
        """
        if not isinstance(event, Event):
            raise InvalidArgumentError(f"expected an Event, got {event!r}")
        traffic = Traffic()
        for corridor, rate in self.corridors:
            load = self.load_for(event.size, rate)
            if load > 0:
                traffic.update_traffic(corridor, load)
        return traffic

    def __str__(self) -> str:
        return f"{self.name} ({self.capacity})"
