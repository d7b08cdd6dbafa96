"""
Interactive planning session.

Holds the pool of free venues and the current allocation while a user
adds and removes one assignment at a time. Callers pull snapshots
(allocation, traffic, free venues) after each edit instead of observing
live collections.
"""

from typing import Dict, Iterable, List, Optional, Union

from ..algorithms.allocator import Allocator, validate_inputs
from ..algorithms.base import Allocation, AllocationResult, AllocatorConfig
from ..models.corridor import Corridor
from ..models.event import Event
from ..models.exceptions import InvalidArgumentError
from ..models.network import VenueNetwork
from ..models.traffic import Traffic
from ..models.venue import Venue
from ..utils.logger import get_logger


logger = get_logger(__name__)


class PlannerSession:
    """
    Editable allocation state on top of a fixed set of venues.

    The aggregate traffic is rebuilt from every active (event, venue) pair
    after each edit rather than patched in place, so it cannot drift from
    the allocation it describes.
    """

    def __init__(self, venues: Union[VenueNetwork, Iterable[Venue]],
                 config: Optional[AllocatorConfig] = None):
        """
        Args:
            venues: Venues available to the session, or a VenueNetwork
            config: Options for ``auto_allocate``
        """
        venue_list = venues.get_venues() if isinstance(venues, VenueNetwork) else list(venues)
        self._venues: List[Venue] = []
        for venue in venue_list:
            if not isinstance(venue, Venue):
                raise InvalidArgumentError(f"expected a Venue, got {venue!r}")
            if venue in self._venues:
                raise InvalidArgumentError(f"duplicate venue: {venue}")
            self._venues.append(venue)

        self._allocator = Allocator(config)
        self._assignments: Dict[Event, Venue] = {}
        self._traffic = Traffic()

    # ==================== Snapshots ====================

    def venues(self) -> List[Venue]:
        """Every venue known to the session."""
        return sorted(self._venues)

    def free_venues(self) -> List[Venue]:
        """Venues not hosting an event, sorted."""
        allocated = set(self._assignments.values())
        return sorted(v for v in self._venues if v not in allocated)

    def allocation(self) -> Allocation:
        """Snapshot of the current allocation."""
        return Allocation(self._assignments.items())

    def traffic(self) -> Traffic:
        """Independent copy of the current aggregate traffic."""
        return self._traffic.copy()

    def corridors_with_traffic(self) -> List[Corridor]:
        return self._traffic.get_corridors_with_traffic()

    def is_allocated(self, event: Event) -> bool:
        return event in self._assignments

    # ==================== Edits ====================

    def add_allocation(self, event: Event, venue: Venue) -> bool:
        """
        Allocate ``venue`` to ``event`` if the result stays safe.

        Returns:
            True if the edit was applied, False if it would overload a
            corridor (the session is left unchanged).

        Raises:
            InvalidArgumentError: unknown or busy venue, event already
                allocated, or venue too small for the event
        """
        if not isinstance(event, Event):
            raise InvalidArgumentError(f"expected an Event, got {event!r}")
        if venue not in self._venues:
            raise InvalidArgumentError(f"venue {venue} is not part of this session")
        if venue in self._assignments.values():
            raise InvalidArgumentError(f"venue {venue} is already allocated")
        if any(e.name == event.name for e in self._assignments):
            raise InvalidArgumentError(f"event {event.name!r} is already allocated")
        if not venue.can_host(event):
            raise InvalidArgumentError(f"venue {venue} cannot host {event}")

        candidate = dict(self._assignments)
        candidate[event] = venue
        traffic = self._rebuild_traffic(candidate)
        if not traffic.is_safe():
            logger.info(
                "Allocation rejected as unsafe | event=%s | venue=%s | overloaded=%s",
                event, venue, [str(c) for c in traffic.overloaded_corridors()]
            )
            return False

        self._assignments = candidate
        self._traffic = traffic
        logger.debug("Allocation added | event=%s | venue=%s", event, venue)
        return True

    def remove_allocation(self, event: Event) -> Venue:
        """
        Remove the allocation for ``event`` and free its venue.

        Raises:
            InvalidArgumentError: if the event is not allocated
        """
        if event not in self._assignments:
            raise InvalidArgumentError(f"event {event} is not allocated")
        venue = self._assignments.pop(event)
        self._traffic = self._rebuild_traffic(self._assignments)
        logger.debug("Allocation removed | event=%s | venue=%s", event, venue)
        return venue

    def clear(self) -> None:
        """Free every venue."""
        self._assignments = {}
        self._traffic = Traffic()

    def auto_allocate(self, events: Iterable[Event]) -> AllocationResult:
        """
        Replace the current allocation with a fresh search over ``events``.

        Input is validated before the session is cleared, so malformed
        events raise InvalidArgumentError and leave the current allocation
        in place. On success the witness allocation is installed; if no
        safe allocation exists the session stays empty.
        """
        events, venues = validate_inputs(events, self._venues)
        self.clear()
        result = self._allocator.solve(events, venues)
        if result.allocation is not None:
            self._assignments = dict(result.allocation.items())
            self._traffic = self._rebuild_traffic(self._assignments)
        return result

    @staticmethod
    def _rebuild_traffic(assignments: Dict[Event, Venue]) -> Traffic:
        """Sum the traffic of every pair from scratch."""
        total = Traffic()
        for event, venue in assignments.items():
            total.add_traffic(venue.traffic_for(event))
        return total

    def __repr__(self) -> str:
        return (f"PlannerSession(venues={len(self._venues)}, "
                f"allocated={len(self._assignments)})")
