"""
Demo venue data: a handful of Brisbane venues and the corridors their
crowds use. Used by the command-line demo and the tests.
"""

from typing import Dict, List, Tuple
from dataclasses import dataclass

from ..models.corridor import Corridor
from ..models.event import Event
from ..models.network import VenueNetwork
from ..models.venue import Venue


# Corridor name -> (start, end, capacity)
SAMPLE_CORRIDORS: Dict[str, Tuple[str, str, int]] = {
    'annerly_city': ('Annerly', 'City', 30),
    'ascot_city': ('Ascot', 'City', 25),
    'bardon_city': ('Bardon', 'City', 30),
    'city_toowong': ('City', 'Toowong', 40),
    'stlucia_toowong': ('St Lucia', 'Toowong', 35),
    'toowong_indooroopilly': ('Toowong', 'Indooroopilly', 15),
}


@dataclass
class VenueTemplate:
    """Venue description with corridors referenced by key."""
    name: str
    capacity: int
    rates: Dict[str, int]  # corridor key -> load at full capacity


SAMPLE_VENUES: List[VenueTemplate] = [
    VenueTemplate('Suncorp Stadium', 200, {'bardon_city': 30, 'city_toowong': 20}),
    VenueTemplate('Riverstage', 120, {'annerly_city': 20, 'city_toowong': 15}),
    VenueTemplate('City Hall', 80, {'ascot_city': 25, 'annerly_city': 10}),
    VenueTemplate('Regatta Hall', 60, {'toowong_indooroopilly': 15, 'stlucia_toowong': 10}),
    VenueTemplate('UQ Great Court', 150, {'stlucia_toowong': 30, 'toowong_indooroopilly': 10}),
]

# Known to have at least one safe allocation over SAMPLE_VENUES
SAMPLE_EVENTS: List[Tuple[str, int]] = [
    ('Concert', 180),
    ('Expo', 100),
    ('Graduation', 140),
    ('Market', 50),
]


def get_sample_corridors() -> Dict[str, Corridor]:
    """Corridor key -> Corridor."""
    return {
        key: Corridor.between(start, end, capacity)
        for key, (start, end, capacity) in SAMPLE_CORRIDORS.items()
    }


def get_sample_venues() -> List[Venue]:
    """Build the demo venues."""
    corridors = get_sample_corridors()
    return [
        Venue(t.name, t.capacity, {corridors[key]: rate for key, rate in t.rates.items()})
        for t in SAMPLE_VENUES
    ]


def get_sample_events() -> List[Event]:
    """Build the demo events."""
    return [Event(name, size) for name, size in SAMPLE_EVENTS]


def build_sample_network() -> VenueNetwork:
    """VenueNetwork holding every demo venue."""
    network = VenueNetwork()
    network.add_venues(get_sample_venues())
    return network
