"""
Unit tests for the algorithms module.
Tests Allocation, AllocatorConfig, SearchMetrics and the Allocator search.
"""

from itertools import permutations

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from venueplanner.models import (
    Corridor, Event, Venue, Traffic, InvalidArgumentError
)
from venueplanner.algorithms import (
    Allocation, AllocationResult, AllocationStatus, AllocatorConfig,
    Allocator, SearchMetrics, allocate
)
import venueplanner.data
from venueplanner.data import (
    SAMPLE_CORRIDORS, SAMPLE_VENUES, build_sample_network,
    get_sample_events, get_sample_venues
)


# ==================== Test Fixtures ====================

SHARED = Corridor.between("Bardon", "City", 10)


def create_shared_corridor_venues():
    """Two venues that each put 6 people on one corridor of capacity 10."""
    north = Venue("North Hall", 20, {SHARED: 6})
    south = Venue("South Hall", 20, {SHARED: 6})
    return north, south


def assert_valid_allocation(allocation, events, venues):
    """Check every postcondition of a returned allocation."""
    assert allocation is not None
    assert set(allocation.keys()) == set(events)
    assert all(venue in venues for venue in allocation.values())
    assert len(set(allocation.values())) == len(allocation)
    assert all(venue.can_host(event) for event, venue in allocation.items())
    assert allocation.traffic().is_safe()


def brute_force_feasible(events, venues):
    """Reference answer: try every injective assignment."""
    if not events:
        return True
    for chosen in permutations(venues, len(events)):
        if not all(v.can_host(e) for e, v in zip(events, chosen)):
            continue
        total = Traffic()
        for e, v in zip(events, chosen):
            total.add_traffic(v.traffic_for(e))
        if total.is_safe():
            return True
    return False


# ==================== Result Types ====================

class TestAllocation:
    """Tests for the Allocation mapping."""

    def test_empty_allocation(self):
        """An empty allocation has no entries and no traffic."""
        allocation = Allocation()
        assert len(allocation) == 0
        assert allocation.is_safe()
        assert allocation.to_dict() == {}

    def test_mapping_behaviour(self):
        """Allocations behave like read-only dicts ordered by event."""
        north, south = create_shared_corridor_venues()
        allocation = Allocation([(Event("B", 5), north), (Event("A", 5), south)])
        assert list(allocation) == [Event("A", 5), Event("B", 5)]
        assert allocation[Event("B", 5)] == north
        assert allocation == {Event("A", 5): south, Event("B", 5): north}
        assert allocation.to_dict() == {"A": "South Hall", "B": "North Hall"}
        assert allocation.venues() == [south, north]

    def test_accepts_dict(self):
        """A plain dict can seed an allocation."""
        north, _ = create_shared_corridor_venues()
        assert len(Allocation({Event("A", 1): north})) == 1

    def test_venue_used_twice_rejected(self):
        """A venue cannot host two events."""
        north, _ = create_shared_corridor_venues()
        with pytest.raises(InvalidArgumentError):
            Allocation([(Event("A", 1), north), (Event("B", 1), north)])

    def test_event_listed_twice_rejected(self):
        """An event cannot be allocated twice."""
        north, south = create_shared_corridor_venues()
        with pytest.raises(InvalidArgumentError):
            Allocation([(Event("A", 1), north), (Event("A", 1), south)])

    def test_aggregate_traffic(self):
        """traffic() merges the traffic of every pair."""
        north, south = create_shared_corridor_venues()
        allocation = Allocation([(Event("A", 20), north), (Event("B", 20), south)])
        assert allocation.traffic().get_traffic(SHARED) == 12
        assert not allocation.is_safe()

    def test_hashable(self):
        """Equal allocations hash alike."""
        north, _ = create_shared_corridor_venues()
        a = Allocation([(Event("A", 1), north)])
        b = Allocation([(Event("A", 1), north)])
        assert hash(a) == hash(b)


class TestAllocatorConfig:
    """Tests for AllocatorConfig."""

    def test_default_values(self):
        """All search options are on by default."""
        config = AllocatorConfig()
        assert config.order_events_by_size is True
        assert config.order_venues_by_capacity is True
        assert config.prune_partial_traffic is True

    def test_dict_round_trip(self):
        """to_dict and from_dict agree; unknown keys are ignored."""
        config = AllocatorConfig(prune_partial_traffic=False)
        data = config.to_dict()
        data['unknown'] = 1
        assert AllocatorConfig.from_dict(data) == config


class TestSearchMetrics:
    """Tests for SearchMetrics and AllocationResult."""

    def test_default_metrics(self):
        """Metrics start at zero."""
        metrics = SearchMetrics()
        assert metrics.nodes_explored == 0
        assert metrics.to_dict()['leaves_checked'] == 0

    def test_result_to_dict(self):
        """Infeasible results serialise with a null allocation."""
        result = AllocationResult(status=AllocationStatus.INFEASIBLE)
        data = result.to_dict()
        assert data['status'] == 'infeasible'
        assert data['allocation'] is None
        assert result.found is False


# ==================== Allocator ====================

class TestAllocatorBasics:
    """Edge cases of the allocator contract."""

    def test_empty_events_and_venues(self):
        """No events and no venues gives an empty allocation."""
        allocation = Allocator().allocate([], [])
        assert allocation is not None
        assert len(allocation) == 0

    def test_empty_events_with_venues(self):
        """No events is trivially allocated whatever the venues."""
        north, south = create_shared_corridor_venues()
        assert allocate([], [north, south]) == {}

    def test_events_without_venues_infeasible(self):
        """Events with no venues cannot be allocated."""
        assert allocate([Event("A", 1)], []) is None

    def test_event_too_big_for_every_venue(self):
        """A size-50 event with venues all smaller than 50 is infeasible."""
        venues = [Venue(f"V{i}", capacity) for i, capacity in enumerate((10, 25, 49))]
        assert allocate([Event("Big", 50)], venues) is None

    def test_more_events_than_venues(self):
        """Each venue hosts at most one event."""
        north, _ = create_shared_corridor_venues()
        assert allocate([Event("A", 1), Event("B", 1)], [north]) is None

    def test_singleton_allocation(self):
        """One event, one venue, corridor load equal to capacity."""
        corridor = Corridor.between("Annerly", "City", 5)
        venue = Venue("Hall", 10, {corridor: 10})
        event = Event("Talk", 5)
        assert venue.traffic_for(event).get_traffic(corridor) == 5

        allocation = allocate([event], [venue])
        assert allocation == {event: venue}

    def test_singleton_over_corridor_capacity(self):
        """The same load on a corridor of capacity 4 is infeasible."""
        corridor = Corridor.between("Annerly", "City", 4)
        venue = Venue("Hall", 10, {corridor: 10})
        assert allocate([Event("Talk", 5)], [venue]) is None

    def test_accepts_sets_and_generators(self):
        """Any iterable of events and venues is accepted."""
        north, south = create_shared_corridor_venues()
        events = {Event("A", 5)}
        allocation = allocate(events, (v for v in (north, south)))
        assert_valid_allocation(allocation, events, [north, south])


class TestAllocatorTraffic:
    """Aggregate traffic must be checked on the merged allocation."""

    def test_each_event_alone_is_safe(self):
        """Either event on its own fits on the shared corridor."""
        north, south = create_shared_corridor_venues()
        event_a, event_b = Event("A", 20), Event("B", 20)
        assert north.traffic_for(event_a).is_safe()
        assert south.traffic_for(event_b).is_safe()
        assert allocate([event_a], [north, south]) is not None
        assert allocate([event_b], [north, south]) is not None

    def test_jointly_unsafe_events_rejected(self):
        """6 + 6 = 12 > 10 on the shared corridor, so no allocation exists."""
        north, south = create_shared_corridor_venues()
        events = [Event("A", 20), Event("B", 20)]
        merged = north.traffic_for(events[0])
        merged.add_traffic(south.traffic_for(events[1]))
        assert merged.get_traffic(SHARED) == 12
        assert not merged.is_safe()

        assert allocate(events, [north, south]) is None

    def test_jointly_unsafe_detected_without_pruning(self):
        """Leaf-only checking reaches the same verdict."""
        north, south = create_shared_corridor_venues()
        config = AllocatorConfig(prune_partial_traffic=False)
        assert allocate([Event("A", 20), Event("B", 20)], [north, south], config) is None

    def test_search_avoids_conflicting_venue(self):
        """With a third venue off the shared corridor, a safe choice exists."""
        north, south = create_shared_corridor_venues()
        quiet = Venue("Quiet Hall", 20, {Corridor.between("Ascot", "City", 50): 6})
        events = [Event("A", 20), Event("B", 20)]
        allocation = allocate(events, [north, south, quiet])
        assert_valid_allocation(allocation, events, [north, south, quiet])
        assert quiet in allocation.values()

    def test_explores_every_capable_venue(self):
        """The search does not stop at the first venue that can host."""
        busy = Corridor.between("Bardon", "City", 5)
        small_busy = Venue("A Small", 10, {busy: 10})
        big_quiet = Venue("B Big", 100)
        event = Event("Party", 10)
        # small_busy fits but overloads its corridor; big_quiet is the answer
        allocation = allocate([event], [small_busy, big_quiet])
        assert allocation == {event: big_quiet}

    def test_large_event_gets_large_venue(self):
        """Venue choice for one event must leave room for the others."""
        small = Venue("Small", 10)
        large = Venue("Large", 100)
        events = [Event("Tiny", 5), Event("Huge", 90)]
        config = AllocatorConfig(order_events_by_size=False, order_venues_by_capacity=False)
        allocation = allocate(events, [large, small], config)
        assert allocation == {Event("Tiny", 5): small, Event("Huge", 90): large}

    def test_demo_data_is_feasible(self):
        """The built-in demo events can be allocated to the demo venues."""
        events, venues = get_sample_events(), get_sample_venues()
        allocation = allocate(events, venues)
        assert_valid_allocation(allocation, events, venues)

    @pytest.mark.parametrize("prune", [True, False])
    @pytest.mark.parametrize("sizes", [
        (5, 5, 5), (12, 3, 7), (20, 1), (9, 9, 9, 9), (30,), (0, 0, 15),
    ])
    def test_matches_brute_force(self, sizes, prune):
        """The search agrees with exhaustive enumeration."""
        a = Corridor.between("Annerly", "City", 12)
        b = Corridor.between("City", "Toowong", 8)
        venues = [
            Venue("V1", 10, {a: 8}),
            Venue("V2", 15, {a: 6, b: 4}),
            Venue("V3", 20, {b: 8}),
            Venue("V4", 30, {a: 5, b: 5}),
        ]
        events = [Event(f"E{i}", size) for i, size in enumerate(sizes)]
        config = AllocatorConfig(prune_partial_traffic=prune)
        allocation = allocate(events, venues, config)
        if brute_force_feasible(events, venues):
            assert_valid_allocation(allocation, events, venues)
        else:
            assert allocation is None


class TestSampleData:
    """Tests for the built-in demo data."""

    def test_exports_resolve(self):
        """Every name the data package exports exists."""
        for name in venueplanner.data.__all__:
            assert hasattr(venueplanner.data, name)

    def test_network_matches_templates(self):
        """The demo network holds every template venue and its capacity."""
        stats = build_sample_network().get_stats()
        assert stats.total_venues == len(SAMPLE_VENUES)
        assert stats.total_venue_capacity == sum(t.capacity for t in SAMPLE_VENUES)
        assert stats.total_corridors == len(SAMPLE_CORRIDORS)


class TestAllocatorValidation:
    """Malformed input raises instead of reporting infeasibility."""

    def test_none_containers_rejected(self):
        """None lists are invalid."""
        with pytest.raises(InvalidArgumentError):
            allocate(None, [])
        with pytest.raises(InvalidArgumentError):
            allocate([], None)

    def test_none_entries_rejected(self):
        """None entries are invalid."""
        north, _ = create_shared_corridor_venues()
        with pytest.raises(InvalidArgumentError):
            allocate([None], [north])
        with pytest.raises(InvalidArgumentError):
            allocate([Event("A", 1)], [north, None])

    def test_duplicate_events_rejected(self):
        """The same event twice is invalid."""
        north, south = create_shared_corridor_venues()
        with pytest.raises(InvalidArgumentError):
            allocate([Event("A", 1), Event("A", 1)], [north, south])

    def test_duplicate_venues_rejected(self):
        """Equal venues twice are invalid."""
        north, _ = create_shared_corridor_venues()
        twin = Venue("North Hall", 20, {SHARED: 6})
        with pytest.raises(InvalidArgumentError):
            allocate([Event("A", 1)], [north, twin])

    def test_wrong_types_rejected(self):
        """Entries must be Events and Venues."""
        north, _ = create_shared_corridor_venues()
        with pytest.raises(InvalidArgumentError):
            allocate(["A"], [north])
        with pytest.raises(InvalidArgumentError):
            allocate([Event("A", 1)], ["North Hall"])


class TestAllocatorResult:
    """Tests for solve() and metrics."""

    def test_solve_allocated(self):
        """A feasible problem is tagged ALLOCATED with metrics."""
        north, south = create_shared_corridor_venues()
        allocator = Allocator()
        result = allocator.solve([Event("A", 20)], [north, south])
        assert result.status == AllocationStatus.ALLOCATED
        assert result.found
        assert len(result.allocation) == 1
        assert result.metrics is allocator.metrics
        assert result.metrics.events == 1
        assert result.metrics.venues == 2
        assert result.metrics.nodes_explored >= 1
        assert result.metrics.leaves_checked == 1
        assert result.metrics.execution_time_seconds >= 0.0

    def test_solve_infeasible(self):
        """An infeasible problem is tagged INFEASIBLE, not raised."""
        north, south = create_shared_corridor_venues()
        result = Allocator().solve([Event("A", 20), Event("B", 20)], [north, south])
        assert result.status == AllocationStatus.INFEASIBLE
        assert result.allocation is None
        assert result.metrics.branches_pruned > 0

    def test_pruning_explores_fewer_leaves(self):
        """Early pruning reaches no more leaves than leaf-only checking."""
        north, south = create_shared_corridor_venues()
        events = [Event("A", 20), Event("B", 20)]
        pruned = Allocator().solve(events, [north, south]).metrics
        exhaustive = Allocator(AllocatorConfig(prune_partial_traffic=False)).solve(
            events, [north, south]).metrics
        assert pruned.leaves_checked == 0
        assert exhaustive.leaves_checked == 2

    def test_inputs_not_mutated(self):
        """The caller's lists are left untouched."""
        north, south = create_shared_corridor_venues()
        events = [Event("Small", 1), Event("Big", 20)]
        venues = [south, north]
        allocate(events, venues)
        assert events == [Event("Small", 1), Event("Big", 20)]
        assert venues == [south, north]
