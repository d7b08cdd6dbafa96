"""
Venue Planner - Event Allocation with Corridor Traffic Safety

Assigns events to venues so that the combined traffic each venue
generates never exceeds the capacity of a shared corridor.
"""

__version__ = '1.0.0'
__author__ = 'Venue Planner Team'
