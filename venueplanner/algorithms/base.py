"""
Result, metrics and configuration types for the venue allocator.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
from enum import Enum

from ..models.event import Event
from ..models.exceptions import InvalidArgumentError
from ..models.traffic import Traffic
from ..models.venue import Venue


class AllocationStatus(Enum):
    """Outcome of an allocation search."""
    ALLOCATED = "allocated"
    INFEASIBLE = "infeasible"


class Allocation(Mapping):
    """
    A read-only one-to-one mapping of events to the venues hosting them.

    No event appears twice and no venue hosts two events. Iteration
    follows the natural order of the events.
    """

    def __init__(self, pairs: Iterable[Tuple[Event, Venue]] = ()):
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        assignments: Dict[Event, Venue] = {}
        used: Dict[Venue, Event] = {}
        for event, venue in items:
            if not isinstance(event, Event) or not isinstance(venue, Venue):
                raise InvalidArgumentError("allocation pairs must be (Event, Venue)")
            if event in assignments:
                raise InvalidArgumentError(f"event {event} is allocated twice")
            if venue in used:
                raise InvalidArgumentError(
                    f"venue {venue} cannot host both {used[venue]} and {event}"
                )
            assignments[event] = venue
            used[venue] = event
        self._assignments = dict(sorted(assignments.items()))

    def __getitem__(self, event: Event) -> Venue:
        return self._assignments[event]

    def __iter__(self) -> Iterator[Event]:
        return iter(self._assignments)

    def __len__(self) -> int:
        return len(self._assignments)

    def __hash__(self) -> int:
        return hash(frozenset(self._assignments.items()))

    def venues(self) -> List[Venue]:
        """Venues in use, in event order."""
        return list(self._assignments.values())

    def traffic(self) -> Traffic:
        """Aggregate traffic of every (event, venue) pair, rebuilt on each call."""
        total = Traffic()
        for event, venue in self._assignments.items():
            total.add_traffic(venue.traffic_for(event))
        return total

    def is_safe(self) -> bool:
        """True if the aggregate traffic respects every corridor capacity."""
        return self.traffic().is_safe()

    def to_dict(self) -> Dict[str, str]:
        """Event name -> venue name."""
        return {event.name: venue.name for event, venue in self._assignments.items()}

    def __repr__(self) -> str:
        body = ", ".join(f"{event} -> {venue}" for event, venue in self._assignments.items())
        return f"Allocation({{{body}}})"


@dataclass
class SearchMetrics:
    """Statistics gathered during one allocation search."""
    execution_time_seconds: float = 0.0
    events: int = 0
    venues: int = 0
    nodes_explored: int = 0    # (event, venue) assignments tried
    branches_pruned: int = 0   # partial assignments rejected as unsafe
    leaves_checked: int = 0    # complete assignments reached

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for serialization."""
        return {
            'execution_time_seconds': self.execution_time_seconds,
            'events': self.events,
            'venues': self.venues,
            'nodes_explored': self.nodes_explored,
            'branches_pruned': self.branches_pruned,
            'leaves_checked': self.leaves_checked
        }


@dataclass
class AllocationResult:
    """Tagged result of a search: either a safe allocation or infeasible."""
    status: AllocationStatus
    allocation: Optional[Allocation] = None
    metrics: SearchMetrics = field(default_factory=SearchMetrics)

    @property
    def found(self) -> bool:
        return self.status == AllocationStatus.ALLOCATED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for serialization."""
        return {
            'status': self.status.value,
            'allocation': self.allocation.to_dict() if self.allocation is not None else None,
            'metrics': self.metrics.to_dict()
        }


@dataclass
class AllocatorConfig:
    """Search options. None of them change which inputs are feasible."""
    # Try big events first; they have the fewest candidate venues
    order_events_by_size: bool = True
    # Try the smallest venue that fits first
    order_venues_by_capacity: bool = True
    # Reject a branch as soon as the partial traffic is unsafe
    prune_partial_traffic: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary."""
        return {
            'order_events_by_size': self.order_events_by_size,
            'order_venues_by_capacity': self.order_venues_by_capacity,
            'prune_partial_traffic': self.prune_partial_traffic
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AllocatorConfig':
        """Create from a dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
