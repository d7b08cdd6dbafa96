"""
Venue network model.
Wraps a NetworkX multigraph of locations and corridors together with the
venues that send traffic through them.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass
import json

import networkx as nx

from .corridor import Corridor
from .exceptions import InvalidArgumentError
from .location import Location
from .venue import Venue


@dataclass
class NetworkStats:
    """Statistics about the network."""
    total_venues: int = 0
    total_locations: int = 0
    total_corridors: int = 0
    shared_corridors: int = 0
    total_venue_capacity: int = 0
    total_corridor_capacity: int = 0


class VenueNetwork:
    """
    Graph of the corridors used by a set of venues.

    Locations are graph nodes. Every corridor is a keyed edge, so two
    corridors with the same endpoints but different capacities remain
    distinct. Each edge remembers which venues use it.
    """

    def __init__(self):
        """Initialize empty network."""
        self._graph = nx.MultiDiGraph()
        self._venues: Dict[str, Venue] = {}

    # ==================== Venue Operations ====================

    def add_venue(self, venue: Venue) -> None:
        """Add a venue and register its corridors."""
        if not isinstance(venue, Venue):
            raise InvalidArgumentError(f"expected a Venue, got {venue!r}")
        if venue.name in self._venues:
            raise InvalidArgumentError(f"venue {venue.name!r} is already in the network")
        self._venues[venue.name] = venue

        for corridor in venue.get_corridors():
            if self._graph.has_edge(corridor.start, corridor.end, key=corridor):
                self._graph.edges[corridor.start, corridor.end, corridor]['venues'].add(venue.name)
            else:
                self._graph.add_edge(corridor.start, corridor.end, key=corridor,
                                     corridor=corridor, venues={venue.name})

    def add_venues(self, venues: List[Venue]) -> None:
        """Add several venues."""
        for venue in venues:
            self.add_venue(venue)

    def get_venue(self, name: str) -> Optional[Venue]:
        """Get a venue by name."""
        return self._venues.get(name)

    def get_venues(self) -> List[Venue]:
        """All venues, sorted."""
        return sorted(self._venues.values())

    # ==================== Corridor Operations ====================

    def get_corridors(self) -> List[Corridor]:
        """Every distinct corridor, in natural order."""
        return sorted(key for _, _, key in self._graph.edges(keys=True))

    def get_locations(self) -> List[Location]:
        """Every location touched by a corridor, sorted by name."""
        return sorted(self._graph.nodes)

    def venues_using(self, corridor: Corridor) -> List[Venue]:
        """Venues that send traffic through ``corridor``."""
        if not self._graph.has_edge(corridor.start, corridor.end, key=corridor):
            return []
        names = self._graph.edges[corridor.start, corridor.end, corridor]['venues']
        return sorted(self._venues[name] for name in names)

    def shared_corridors(self) -> List[Corridor]:
        """Corridors used by two or more venues."""
        return sorted(
            key for _, _, key, names in self._graph.edges(keys=True, data='venues')
            if len(names) > 1
        )

    def get_outgoing_corridors(self, location: Location) -> List[Corridor]:
        """Corridors that start at ``location``."""
        if location not in self._graph:
            return []
        return sorted(key for _, _, key in self._graph.out_edges(location, keys=True))

    # ==================== Statistics ====================

    def get_stats(self) -> NetworkStats:
        """Get network statistics."""
        corridors = self.get_corridors()
        stats = NetworkStats()
        stats.total_venues = len(self._venues)
        stats.total_locations = self._graph.number_of_nodes()
        stats.total_corridors = len(corridors)
        stats.shared_corridors = len(self.shared_corridors())
        stats.total_venue_capacity = sum(v.capacity for v in self._venues.values())
        stats.total_corridor_capacity = sum(c.capacity for c in corridors)
        return stats

    # ==================== Serialization ====================

    def to_dict(self) -> Dict[str, Any]:
        """Convert network to dictionary for serialization."""
        return {
            'venues': [
                {
                    'name': v.name,
                    'capacity': v.capacity,
                    'corridors': [
                        {
                            'start': c.start.name,
                            'end': c.end.name,
                            'capacity': c.capacity,
                            'rate': rate
                        }
                        for c, rate in v.corridors
                    ]
                }
                for v in self.get_venues()
            ]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VenueNetwork':
        """Build a network from the dictionary produced by ``to_dict``."""
        if not isinstance(data, dict) or not isinstance(data.get('venues'), list):
            raise InvalidArgumentError("venue document must contain a 'venues' list")

        network = cls()
        for index, venue_data in enumerate(data['venues']):
            try:
                corridors = [
                    (Corridor.between(c['start'], c['end'], c['capacity']), c['rate'])
                    for c in venue_data.get('corridors', [])
                ]
                venue = Venue(venue_data['name'], venue_data['capacity'], corridors)
            except (KeyError, TypeError, AttributeError) as exc:
                raise InvalidArgumentError(
                    f"venue entry {index} is malformed: missing or invalid {exc}"
                ) from exc
            network.add_venue(venue)
        return network

    def save_to_file(self, filepath: str) -> None:
        """Save network to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'VenueNetwork':
        """Load network from JSON file."""
        with open(filepath, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise InvalidArgumentError(f"{filepath} is not valid JSON: {exc}") from exc
        return cls.from_dict(data)

    def __len__(self) -> int:
        """Return number of venues."""
        return len(self._venues)

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (f"VenueNetwork(venues={stats.total_venues}, "
                f"locations={stats.total_locations}, "
                f"corridors={stats.total_corridors})")
