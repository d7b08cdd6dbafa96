"""
Data package: built-in demo venues and events.
"""

from .sample_venues import (
    SAMPLE_CORRIDORS, SAMPLE_VENUES, SAMPLE_EVENTS, VenueTemplate,
    get_sample_corridors, get_sample_venues, get_sample_events,
    build_sample_network
)

__all__ = [
    'SAMPLE_CORRIDORS', 'SAMPLE_VENUES', 'SAMPLE_EVENTS', 'VenueTemplate',
    'get_sample_corridors', 'get_sample_venues', 'get_sample_events',
    'build_sample_network'
]
