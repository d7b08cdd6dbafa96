"""
Backtracking search for a safe allocation of events to venues.

Finding an allocation is constrained bipartite matching with a global,
knapsack-like side constraint (aggregate corridor load), so the search is
exponential in the worst case. Inputs are expected to be small: tens of
events and venues.
"""

from typing import Dict, Iterable, List, Optional, Set, Tuple
import time

from .base import (
    Allocation, AllocationResult, AllocationStatus, AllocatorConfig, SearchMetrics
)
from ..models.event import Event
from ..models.exceptions import InvalidArgumentError
from ..models.traffic import Traffic
from ..models.venue import Venue
from ..utils.logger import get_logger


logger = get_logger(__name__)


def validate_inputs(events: Iterable[Event],
                    venues: Iterable[Venue]) -> Tuple[List[Event], List[Venue]]:
    """Reject None containers, None entries, wrong types and duplicates."""
    if events is None or venues is None:
        raise InvalidArgumentError("events and venues must not be None")

    checked: Dict[str, list] = {'event': [], 'venue': []}
    for kind, items, item_type in (('event', events, Event), ('venue', venues, Venue)):
        seen: Set = set()
        for item in items:
            if item is None:
                raise InvalidArgumentError(f"{kind} list contains None")
            if not isinstance(item, item_type):
                raise InvalidArgumentError(f"expected {item_type.__name__}, got {item!r}")
            if item in seen:
                raise InvalidArgumentError(f"duplicate {kind}: {item}")
            seen.add(item)
            checked[kind].append(item)
    return checked['event'], checked['venue']


class Allocator:
    """
    Finds one allocation whose merged venue traffic is safe.

    For each event in turn, the search branches over every unused venue
    able to host it. The running aggregate traffic gains the venue's
    traffic on the way down and loses it again on backtrack. Loads only
    grow along a branch, so a partial aggregate that is already unsafe
    can never become safe and the branch is cut immediately. The first
    complete safe allocation is returned; which one that is, among
    several, is unspecified.
    """

    def __init__(self, config: Optional[AllocatorConfig] = None):
        self.config = config or AllocatorConfig()
        self._metrics = SearchMetrics()

    @property
    def metrics(self) -> SearchMetrics:
        """Metrics of the most recent search."""
        return self._metrics

    def allocate(self, events: Iterable[Event],
                 venues: Iterable[Venue]) -> Optional[Allocation]:
        """
        Return a safe allocation of events to venues, or None if none exists.

        Raises:
            InvalidArgumentError: on None entries or duplicate events/venues
        """
        return self.solve(events, venues).allocation

    def solve(self, events: Iterable[Event], venues: Iterable[Venue]) -> AllocationResult:
        """
        Run the search and return a tagged result with metrics.

        Infeasibility is reported through the result status, never raised.
        """
        event_list, venue_list = validate_inputs(events, venues)
        start_time = time.perf_counter()
        self._metrics = SearchMetrics(events=len(event_list), venues=len(venue_list))

        if self.config.order_events_by_size:
            # Stable sort keeps caller order among equal sizes
            event_list.sort(key=lambda e: -e.size)
        if self.config.order_venues_by_capacity:
            venue_list.sort(key=lambda v: v.capacity)

        logger.debug(
            "Allocation search started | events=%s | venues=%s | config=%s",
            len(event_list), len(venue_list), self.config.to_dict()
        )

        # Traffic per (event, venue) never changes during a search
        traffic_cache: Dict[Tuple[Event, Venue], Traffic] = {}
        assignment: Dict[Event, Venue] = {}
        used = [False] * len(venue_list)
        aggregate = Traffic()

        found = self._search(0, event_list, venue_list, used, assignment,
                             aggregate, traffic_cache)

        self._metrics.execution_time_seconds = time.perf_counter() - start_time
        if found:
            result = AllocationResult(
                status=AllocationStatus.ALLOCATED,
                allocation=Allocation(assignment.items()),
                metrics=self._metrics,
            )
        else:
            result = AllocationResult(status=AllocationStatus.INFEASIBLE,
                                      metrics=self._metrics)

        logger.info(
            "Allocation search finished | status=%s | nodes=%s | pruned=%s | "
            "leaves=%s | seconds=%.6f",
            result.status.value,
            self._metrics.nodes_explored,
            self._metrics.branches_pruned,
            self._metrics.leaves_checked,
            self._metrics.execution_time_seconds,
        )
        return result

    def _search(self, index: int, events: List[Event], venues: List[Venue],
                used: List[bool], assignment: Dict[Event, Venue],
                aggregate: Traffic,
                traffic_cache: Dict[Tuple[Event, Venue], Traffic]) -> bool:
        """Depth-first search; leaves ``assignment`` filled on success."""
        if index == len(events):
            self._metrics.leaves_checked += 1
            # With pruning on, every prefix was already checked
            return self.config.prune_partial_traffic or aggregate.is_safe()

        event = events[index]
        for position, venue in enumerate(venues):
            if used[position] or not venue.can_host(event):
                continue
            self._metrics.nodes_explored += 1

            key = (event, venue)
            if key not in traffic_cache:
                traffic_cache[key] = venue.traffic_for(event)
            venue_traffic = traffic_cache[key]

            aggregate.add_traffic(venue_traffic)
            if self.config.prune_partial_traffic and not aggregate.is_safe():
                self._metrics.branches_pruned += 1
                aggregate.add_traffic(venue_traffic.negated())
                continue

            used[position] = True
            assignment[event] = venue
            if self._search(index + 1, events, venues, used, assignment,
                            aggregate, traffic_cache):
                return True
            del assignment[event]
            used[position] = False
            aggregate.add_traffic(venue_traffic.negated())

        return False


def allocate(events: Iterable[Event], venues: Iterable[Venue],
             config: Optional[AllocatorConfig] = None) -> Optional[Allocation]:
    """Convenience wrapper: one-off search with a fresh Allocator."""
    return Allocator(config).allocate(events, venues)
