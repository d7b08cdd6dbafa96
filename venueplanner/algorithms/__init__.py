"""
Allocation search.

Provides:
- Allocator: backtracking search for a traffic-safe event/venue allocation
- Allocation, AllocationResult, SearchMetrics, AllocatorConfig
"""

from .base import (
    AllocationStatus, Allocation, AllocationResult,
    SearchMetrics, AllocatorConfig
)
from .allocator import Allocator, allocate

__all__ = [
    # Result and configuration types
    'AllocationStatus', 'Allocation', 'AllocationResult',
    'SearchMetrics', 'AllocatorConfig',
    # Search
    'Allocator', 'allocate'
]
