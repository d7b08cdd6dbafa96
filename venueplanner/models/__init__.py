"""
Models for the venue network: locations, corridors, events, venues
and the traffic they generate.
"""

from .exceptions import PlannerError, InvalidArgumentError, InvalidTrafficError
from .location import Location
from .corridor import Corridor
from .event import Event
from .traffic import Traffic
from .venue import Venue
from .network import VenueNetwork, NetworkStats

__all__ = [
    'PlannerError', 'InvalidArgumentError', 'InvalidTrafficError',
    'Location', 'Corridor', 'Event', 'Traffic', 'Venue',
    'VenueNetwork', 'NetworkStats'
]
